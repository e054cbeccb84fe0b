"""Tests for the pattern renderer and the other text renderers."""

import pytest
from hypothesis import given, strategies as st

from trogue.models import Achievement, Game
from trogue.ui.display import (
    ACHIEVEMENT_TOKENS,
    GAME_TOKENS,
    filter_games,
    format_achievement,
    format_game,
    format_percent,
    format_unlock_time,
    render,
    render_banner,
    render_card,
    render_progress_bar,
)

games = st.builds(
    Game,
    app_id=st.integers(min_value=0, max_value=2**32 - 1),
    name=st.text(max_size=30),
)

printable = st.characters(blacklist_categories=("Cc", "Cs", "Zl", "Zp"))

achievements = st.builds(
    Achievement,
    api_name=st.text(alphabet=printable, max_size=20),
    name=st.text(max_size=20),
    description=st.text(max_size=40),
    achieved=st.integers(min_value=0, max_value=1),
    unlock_time=st.integers(min_value=0, max_value=4_102_444_800),
)

UNLOCKED = Achievement(
    api_name="ACH_WIN",
    name="Winner",
    description="Win a game",
    achieved=1,
    unlock_time=1_700_000_000,
)
LOCKED = Achievement(api_name="ACH_LOSE", name="Loser", description="Lose a game", achieved=0, unlock_time=0)


class TestPatternRenderer:
    """Character-by-character token substitution."""

    def test_game_tokens(self) -> None:
        game = Game(app_id=20, name="Beta Quest")

        assert format_game("[i] n", game) == "[20] Beta Quest"
        assert format_game("i: n", game) == "20: Beta Quest"

    def test_achievement_tokens(self) -> None:
        assert format_achievement("n - s (t)", UNLOCKED) == "Winner - Y (2023-11-14 22:13:20)"
        assert format_achievement("i|d|s", LOCKED) == "ACH_LOSE|Lose a game|N"

    def test_locked_time_renders_epoch(self) -> None:
        assert format_achievement("t", LOCKED) == "1970-01-01 00:00:00"

    def test_tokens_are_case_sensitive(self) -> None:
        assert format_game("N I", Game(app_id=1, name="x")) == "N I"

    def test_adjacent_tokens_are_not_combined(self) -> None:
        assert format_game("nn", Game(app_id=1, name="ab")) == "abab"

    def test_render_dispatches_on_record_type(self) -> None:
        game = Game(app_id=7, name="Game")

        assert render("i", game) == "7"
        assert render("i", UNLOCKED) == "ACH_WIN"

    @given(record=st.one_of(games, achievements))
    def test_empty_pattern_renders_empty(self, record: Game | Achievement) -> None:
        assert render("", record) == ""

    @given(record=games, pattern=st.text(max_size=30))
    def test_non_token_characters_are_copied(self, record: Game, pattern: str) -> None:
        literal = "".join(ch for ch in pattern if ch not in GAME_TOKENS)

        assert format_game(literal, record) == literal

    @given(record=achievements, pattern=st.text(max_size=30))
    def test_rendering_is_concatenation_of_characters(self, record: Achievement, pattern: str) -> None:
        expected = "".join(format_achievement(ch, record) for ch in pattern)

        assert format_achievement(pattern, record) == expected

    @given(record=achievements, pattern=st.text(alphabet="indst", max_size=10))
    def test_token_characters_map_to_fields(self, record: Achievement, pattern: str) -> None:
        expected = "".join(ACHIEVEMENT_TOKENS[ch](record) for ch in pattern)

        assert format_achievement(pattern, record) == expected


class TestFormatters:
    """Percentages, timestamps, bars, banners and cards."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0.0, "0"),
            (50.5, "50.5"),
            (100.0, "100"),
            (3.14159, "3.14159"),
            (12, "12"),
            (1e-05, "0.00001"),
            (0.0001234, "0.0001234"),
            (1e16, "10000000000000000"),
        ],
    )
    def test_format_percent(self, value: float, expected: str) -> None:
        assert format_percent(value) == expected

    def test_format_unlock_time_is_utc(self) -> None:
        assert format_unlock_time(0) == "1970-01-01 00:00:00"
        assert format_unlock_time(86_399) == "1970-01-01 23:59:59"

    @pytest.mark.parametrize("epoch", [10**12, 2**63, -(10**14)])
    def test_format_unlock_time_out_of_range_prints_seconds(self, epoch: int) -> None:
        assert format_unlock_time(epoch) == str(epoch)

    @given(value=st.floats(min_value=0, max_value=100, allow_nan=False))
    def test_format_percent_never_uses_exponent(self, value: float) -> None:
        text = format_percent(value)

        assert "e" not in text.lower()
        assert float(text) == value

    def test_progress_bar_half_complete(self) -> None:
        assert render_progress_bar(1, 2, 10) == "[█████     ] 50.0% (1/2)"

    def test_progress_bar_rounds_half_up(self) -> None:
        # 1/8 of 4 cells is 0.5 of a cell
        assert render_progress_bar(1, 8, 4) == "[█   ] 12.5% (1/8)"

    def test_progress_bar_zero_width(self) -> None:
        assert render_progress_bar(1, 3, 0) == "[] 33.3% (1/3)"

    @given(
        total=st.integers(min_value=1, max_value=500),
        data=st.data(),
        width=st.integers(min_value=0, max_value=200),
    )
    def test_progress_bar_shape(self, total: int, data: st.DataObject, width: int) -> None:
        completed = data.draw(st.integers(min_value=0, max_value=total))

        bar = render_progress_bar(completed, total, width)
        cells = bar[1:bar.index("]")]

        assert len(cells) == width
        assert cells == "█" * cells.count("█") + " " * cells.count(" ")
        if completed == total:
            assert cells == "█" * width
        if completed == 0:
            assert cells == " " * width
        assert bar.endswith(f"% ({completed}/{total})")

    def test_banner(self) -> None:
        assert render_banner("Title", 11) == ["=" * 11, "   Title   ", "=" * 11]

    def test_banner_narrower_than_title(self) -> None:
        assert render_banner("Recently Played Games Dashboard", 10) == [
            "=" * 10,
            "Recently Played Games Dashboard",
            "=" * 10,
        ]

    @given(title=st.text(max_size=40), width=st.integers(min_value=0, max_value=120))
    def test_banner_padding_is_symmetric(self, title: str, width: int) -> None:
        rule, middle, bottom = render_banner(title, width)

        padding = max(0, (width - len(title)) // 2)
        assert rule == bottom == "=" * width
        assert middle == " " * padding + title + " " * padding

    def test_card(self) -> None:
        card = render_card(UNLOCKED)

        assert card == (
            "┌───────────────────────────┐\n"
            "│ Name:             ACH_WIN │\n"
            "│ Achieved:               Y │\n"
            "│ Date: 2023-11-14 22:13:20 │\n"
            "└───────────────────────────┘\n"
        )

    @given(record=achievements)
    def test_card_rows_have_equal_width(self, record: Achievement) -> None:
        lines = render_card(record).splitlines()

        assert len(lines) == 5
        assert len({len(line) for line in lines}) == 1


class TestFilterGames:
    """Case-insensitive name filtering."""

    GAMES = [Game(app_id=10, name="Alpha"), Game(app_id=20, name="Beta Quest"), Game(app_id=30, name="QUESTING")]

    def test_filter_is_case_insensitive_and_ordered(self) -> None:
        assert [g.app_id for g in filter_games(self.GAMES, "quest")] == [20, 30]

    @pytest.mark.parametrize("name_filter", ["", None])
    def test_empty_filter_keeps_all(self, name_filter: str | None) -> None:
        assert filter_games(self.GAMES, name_filter) == self.GAMES

    @given(name_filter=st.text(max_size=5))
    def test_filter_result_is_subsequence(self, name_filter: str) -> None:
        result = filter_games(self.GAMES, name_filter)

        assert result == [g for g in self.GAMES if g in result]
        assert all(name_filter.lower() in g.name.lower() for g in result)
