from pyparkingcard.models import RatingSummary, ReviewAuthor
from pyparkingcard.ratings import (
    RatingsAsArray,
    RatingStats,
    RatingsWithStats,
    UnrecognizedRatings,
    aggregate_ratings,
    classify_payload,
    normalize_review,
    normalize_reviews,
    summarize,
)


def test_classify_payload_shapes() -> None:
    assert classify_payload([{"score": 4}]) == RatingsAsArray(records=[{"score": 4}])
    assert classify_payload({"ratings": [{"score": 4}]}) == RatingsWithStats(
        records=[{"score": 4}],
        stats=None,
    )
    assert classify_payload({"stats": {"avg": 4.2, "count": 9}}) == RatingsWithStats(
        records=[],
        stats=RatingStats(average=4.2, count=9),
    )


def test_classify_payload_unrecognized() -> None:
    for data in (None, "ratings", 42, {"foo": 1}, {"ratings": "nope"}):
        assert classify_payload(data) == UnrecognizedRatings()


def test_stats_with_string_values_are_ignored() -> None:
    payload = classify_payload({"ratings": [{"score": 2}], "stats": {"avg": "4", "count": "3"}})
    assert isinstance(payload, RatingsWithStats)
    assert payload.stats is None
    assert summarize(payload, 0.0) == RatingSummary(average=2.0, count=1)


def test_stats_coerce_numeric_string_next_to_real_number() -> None:
    summary, reviews = aggregate_ratings(
        {"ratings": [{"score": 4}, {"score": 5}], "stats": {"avg": "4.5", "count": 2}},
        1.0,
    )
    assert summary == RatingSummary(average=4.5, count=2)
    assert len(reviews) == 2


def test_stats_with_unparseable_average_default_to_zero() -> None:
    summary, _ = aggregate_ratings({"stats": {"avg": "n/a", "count": 3}}, 2.0)
    assert summary == RatingSummary(average=0.0, count=3)


def test_server_stats_are_preferred() -> None:
    summary, reviews = aggregate_ratings(
        {"ratings": [{"score": 1}], "stats": {"avg": 4.5, "count": 10}},
        3.0,
    )
    assert summary == RatingSummary(average=4.5, count=10)
    assert len(reviews) == 1


def test_partial_stats_default_missing_fields() -> None:
    summary, _ = aggregate_ratings({"stats": {"count": 3}}, 3.0)
    assert summary == RatingSummary(average=0.0, count=3)


def test_mean_coerces_bad_scores_to_zero() -> None:
    data = [{"score": 4}, {"score": "5"}, {"score": "x"}, {}]
    summary, _ = aggregate_ratings(data, 0.0)
    assert summary == RatingSummary(average=2.25, count=4)


def test_empty_and_unrecognized_fall_back_to_cached_rating() -> None:
    assert aggregate_ratings([], 3.5) == (RatingSummary(average=3.5, count=0), [])
    assert aggregate_ratings({"ratings": []}, 3.5) == (RatingSummary(average=3.5, count=0), [])
    assert aggregate_ratings("oops", 3.5) == (RatingSummary(average=3.5, count=0), [])


def test_reviews_sorted_newest_first_with_undated_last() -> None:
    reviews = normalize_reviews(
        [
            {"_id": "b", "createdAt": "2024-02-01"},
            {"_id": "none"},
            {"_id": "a", "createdAt": "2024-03-01"},
        ]
    )
    assert [review.id for review in reviews] == ["a", "b", "none"]


def test_unparseable_timestamp_sorts_last() -> None:
    reviews = normalize_reviews(
        [
            {"_id": "bad", "createdAt": "yesterday"},
            {"_id": "good", "createdAt": "2023-12-31T23:59:59Z"},
        ]
    )
    assert [review.id for review in reviews] == ["good", "bad"]


def test_review_author_variants() -> None:
    assert normalize_review({"fromUser": {"name": "Asha", "_id": "u1"}}).author == ReviewAuthor(
        name="Asha",
        id="u1",
    )
    assert normalize_review({"fromUser": {"fullName": "Ravi K"}}).author == ReviewAuthor(
        name="Ravi K"
    )
    assert normalize_review({"fromUser": {"email": "a@x.test"}}).author == ReviewAuthor(
        name="a@x.test"
    )
    assert normalize_review({"fromUser": {}}).author == ReviewAuthor(name="Anonymous")
    assert normalize_review({"fromUser": "u42"}).author == "u42"
    assert normalize_review({}).author is None


def test_review_defaults() -> None:
    review = normalize_review({"_id": 7, "score": None, "comment": None})
    assert review.id == "7"
    assert review.score == 0.0
    assert review.comment == ""
    assert review.created_at is None


def test_non_mapping_records_count_as_zero() -> None:
    summary, reviews = aggregate_ratings([{"score": 4}, "junk"], 1.0)
    assert summary == RatingSummary(average=2.0, count=2)
    assert len(reviews) == 2
