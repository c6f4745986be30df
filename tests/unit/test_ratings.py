from app.services.ratings import average_rating


def test_no_ratings_is_zero():
    assert average_rating([]) == 0.0


def test_single_rating():
    assert average_rating([5]) == 5.0


def test_mean_is_rounded_to_one_decimal():
    assert average_rating([4, 4, 5]) == 4.3
    assert average_rating([1, 2]) == 1.5
    assert average_rating([5, 4, 4]) == 4.3
    assert average_rating([3, 3, 3, 4, 4, 4]) == 3.5


def test_halves_round_up():
    # 4.25 would round to 4.2 with float round()
    assert average_rating([5, 4, 4, 4]) == 4.3
    assert average_rating([1, 1, 1, 2]) == 1.3


def test_accepts_generators():
    assert average_rating(r for r in (2.0, 3.0)) == 2.5
