import pytest

from app.core.container import AppContainer
from app.core.errors import InvalidInputError, MovieNotFoundError
from app.core.settings import Settings
from app.models.game import GuessRequest, HintRequest
from app.models.movie import MovieRecord
from app.services.catalog import MovieCatalog

DAY = "2026-03-01"


def _settings() -> Settings:
    return Settings(environment="test")


def _catalog() -> MovieCatalog:
    rows = [
        ("Inception", 2010, "Christopher Nolan", ["Action", "Science Fiction"], ["Leonardo DiCaprio", "Elliot Page"]),
        ("Interstellar", 2014, "Christopher Nolan", ["Drama", "Science Fiction"], ["Matthew McConaughey"]),
        ("Arrival", 2016, "Denis Villeneuve", ["Drama", "Science Fiction"], ["Amy Adams", "Jeremy Renner"]),
        ("Dune", 2021, "Denis Villeneuve", ["Science Fiction", "Adventure"], ["Timothee Chalamet"]),
        ("Spirited Away", 2001, "Hayao Miyazaki", ["Animation", "Fantasy"], ["Rumi Hiiragi"]),
        ("Pulp Fiction", 1994, "Quentin Tarantino", ["Thriller", "Crime"], ["John Travolta", "Uma Thurman"]),
        ("The Godfather", 1972, "Francis Ford Coppola", ["Drama", "Crime"], ["Marlon Brando", "Al Pacino"]),
        ("Parasite", 2019, "Bong Joon-ho", ["Comedy", "Thriller", "Drama"], ["Song Kang-ho"]),
    ]
    return MovieCatalog(
        MovieRecord(
            id=i,
            title=title,
            year=year,
            director=director,
            genres=genres,
            actors=actors,
            tagline=f"Tagline of {title}",
            overview=f"Overview of {title}",
            vote_average=8.0,
        )
        for i, (title, year, director, genres, actors) in enumerate(rows, start=1)
    )


def _container() -> AppContainer:
    return AppContainer(_settings(), catalog=_catalog())


def _wrong_title(container: AppContainer, round_number: int = 0) -> str:
    target = container.selector.get_target(DAY, round_number)
    return next(movie.title for movie in container.catalog if movie.title != target.title)


def test_daily_reports_puzzle_number() -> None:
    daily = _container().game_service.daily(DAY)
    assert daily.puzzle_number == 19
    assert daily.date == DAY
    assert daily.rounds_per_day == 5
    assert "Director" in daily.categories


def test_correct_guess_solves_and_reveals_answer() -> None:
    container = _container()
    target = container.selector.get_target(DAY, 2)

    response = container.game_service.guess(GuessRequest(guess=target.title.upper(), guess_count=0, round=2, date=DAY))

    assert response.solved is True
    assert response.game_over is True
    assert response.guess_count == 1
    assert response.answer == target
    assert response.feedback.director.color == "green"
    assert response.lifelines.tagline is None


def test_wrong_guess_keeps_answer_hidden() -> None:
    container = _container()
    response = container.game_service.guess(GuessRequest(guess=_wrong_title(container), guess_count=0, date=DAY))

    assert response.solved is False
    assert response.game_over is False
    assert response.answer is None
    assert response.lifelines.tagline is None
    assert response.lifelines.overview is None


def test_lifelines_unlock_with_guess_count() -> None:
    container = _container()
    target = container.selector.get_target(DAY, 0)
    guess = _wrong_title(container)

    fourth = container.game_service.guess(GuessRequest(guess=guess, guess_count=3, date=DAY))
    assert fourth.lifelines.tagline == target.tagline
    assert fourth.lifelines.overview is None

    seventh = container.game_service.guess(GuessRequest(guess=guess, guess_count=6, date=DAY))
    assert seventh.lifelines.overview == target.overview


def test_last_guess_ends_the_game() -> None:
    container = _container()
    response = container.game_service.guess(GuessRequest(guess=_wrong_title(container), guess_count=9, date=DAY))
    assert response.game_over is True
    assert response.solved is False
    assert response.answer == container.selector.get_target(DAY, 0)


def test_unknown_guess_raises_not_found() -> None:
    with pytest.raises(MovieNotFoundError):
        _container().game_service.guess(GuessRequest(guess="Zootopia", date=DAY))


def test_bad_round_is_rejected_before_title_lookup() -> None:
    with pytest.raises(InvalidInputError):
        _container().game_service.guess(GuessRequest(guess="Zootopia", round=7, date=DAY))


def test_locked_lifelines_are_left_out_of_payload() -> None:
    container = _container()
    guess = _wrong_title(container)

    first = container.game_service.guess(GuessRequest(guess=guess, guess_count=0, date=DAY))
    assert first.model_dump(by_alias=True)["lifelines"] == {}

    fourth = container.game_service.guess(GuessRequest(guess=guess, guess_count=3, date=DAY))
    assert list(fourth.model_dump(by_alias=True)["lifelines"]) == ["tagline"]


def test_blank_guess_is_invalid() -> None:
    with pytest.raises(InvalidInputError):
        _container().game_service.guess(GuessRequest(guess="  ", date=DAY))


def test_hint_uses_the_same_target_as_scoring() -> None:
    container = _container()
    for round_number in range(5):
        target = container.selector.get_target(DAY, round_number)
        hint = container.game_service.hint(HintRequest(hint_type="decade", round=round_number, date=DAY))
        assert hint.value == f"{target.year // 10 * 10}s"
        assert hint.hint_type == "decade"


def test_titles_pass_through_catalog_order() -> None:
    titles = _container().game_service.titles().titles
    assert titles[0] == "Inception"
    assert titles[-1] == "Parasite"
    assert len(titles) == 8
