"""Tests for filtering and exporting stored games."""

import json

import pytest

from nhl_stats.exceptions import UnsupportedOutputFormatError, ValidationError
from nhl_stats.models.game import GameType
from nhl_stats.query import (
    GameQuery,
    OutputFormat,
    export_games,
    filter_games,
    load_games,
    query_games,
)
from nhl_stats.schema.games import insert_game


@pytest.fixture
def two_season_records(make_feed):
    """Two seasons, Bruins and Kraken games, one playoff game."""
    return [
        make_feed(2022020005, season="20222023", home="Boston Bruins", away="Ottawa Senators"),
        make_feed(2022020006, season="20222023", home="Seattle Kraken", away="Anaheim Ducks"),
        make_feed(2023020001, season="20232024", home="Boston Bruins", away="Chicago Blackhawks"),
        make_feed(2023020002, season="20232024", home="Seattle Kraken", away="Vegas Golden Knights"),
        make_feed(2023020003, season="20232024", home="Pittsburgh Penguins", away="Boston Bruins"),
        make_feed(
            2023030111,
            season="20232024",
            game_type="P",
            home="Boston Bruins",
            away="Toronto Maple Leafs",
        ),
    ]


def _pks(records):
    return [r["gameData"]["game"]["pk"] for r in records]


class TestFilterGames:
    def test_no_filters_returns_everything(self, two_season_records):
        assert filter_games(two_season_records, GameQuery()) == two_season_records

    def test_season_and_team_are_conjunctive(self, two_season_records):
        result = filter_games(two_season_records, GameQuery(season="2023", team="Bruins"))

        assert _pks(result) == [2023020001, 2023020003, 2023030111]

    def test_season_is_a_prefix_match(self, two_season_records):
        assert len(filter_games(two_season_records, GameQuery(season="2022"))) == 2
        assert len(filter_games(two_season_records, GameQuery(season="20232024"))) == 4
        assert filter_games(two_season_records, GameQuery(season="2024")) == []

    def test_team_matches_home_or_away(self, two_season_records):
        result = filter_games(two_season_records, GameQuery(team="Kraken"))

        assert _pks(result) == [2022020006, 2023020002]

    def test_team_match_is_case_sensitive(self, two_season_records):
        assert filter_games(two_season_records, GameQuery(team="bruins")) == []

    def test_game_number_matches_primary_key(self, two_season_records):
        result = filter_games(two_season_records, GameQuery(game_number=2023020002))

        assert _pks(result) == [2023020002]

    def test_game_type_matches_letter_or_numeric_code(self, two_season_records, make_feed):
        records = [*two_season_records, make_feed(2023030112, game_type="03")]

        result = filter_games(records, GameQuery(game_type=GameType.PLAYOFFS))

        assert _pks(result) == [2023030111, 2023030112]

    def test_all_filters_together(self, two_season_records):
        query = GameQuery(
            season="2023",
            game_type=GameType.REGULAR,
            game_number=2023020003,
            team="Penguins",
        )

        assert _pks(filter_games(two_season_records, query)) == [2023020003]

    def test_unfiltered_query_tolerates_partial_records(self):
        records = [{"gamePk": 1}]

        assert filter_games(records, GameQuery()) == records

    def test_filtered_query_rejects_records_missing_fields(self):
        with pytest.raises(ValidationError):
            filter_games([{"gamePk": 1}], GameQuery(team="Bruins"))


class TestLoadAndQuery:
    def test_load_games_decodes_rows(self, db_connection, two_season_records):
        for record in reversed(two_season_records):
            insert_game(db_connection, str(record["gamePk"]), record)

        assert load_games(db_connection) == two_season_records

    def test_query_games(self, db_connection, two_season_records):
        for record in two_season_records:
            insert_game(db_connection, str(record["gamePk"]), record)

        result = query_games(db_connection, GameQuery(season="2022", team="Bruins"))

        assert _pks(result) == [2022020005]

    def test_load_games_empty(self, db_connection):
        assert load_games(db_connection) == []


class TestExportGames:
    def test_writes_json_array_and_creates_directory(self, tmp_path, two_season_records):
        output_path = tmp_path / "out" / "stats.json"

        written = export_games(two_season_records[:2], output_path)

        assert written == output_path
        assert json.loads(output_path.read_text(encoding="utf-8")) == two_season_records[:2]

    def test_overwrites_previous_export(self, tmp_path, two_season_records):
        output_path = tmp_path / "out" / "stats.json"
        export_games(two_season_records, output_path)

        export_games([], output_path)

        assert json.loads(output_path.read_text(encoding="utf-8")) == []

    def test_csv_is_unsupported_and_writes_nothing(self, tmp_path, two_season_records):
        output_path = tmp_path / "out" / "stats.json"

        with pytest.raises(UnsupportedOutputFormatError, match="CSV"):
            export_games(two_season_records, output_path, OutputFormat.CSV)

        assert not output_path.exists()
        assert not output_path.parent.exists()

    def test_csv_leaves_existing_export_untouched(self, tmp_path, two_season_records):
        output_path = tmp_path / "out" / "stats.json"
        export_games(two_season_records[:1], output_path)
        before = output_path.read_bytes()

        with pytest.raises(UnsupportedOutputFormatError):
            export_games(two_season_records, output_path, OutputFormat.CSV)

        assert output_path.read_bytes() == before
