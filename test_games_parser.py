"""Тесты разбора матчей."""

import pytest

from games_parser import (
    FULL_TIME,
    MatchRecord,
    ParticipantRecord,
    clean_team_name,
    parse_games,
    parse_kickoff,
    parse_match_box,
    parse_penalties,
    parse_score,
    parse_wiki_date,
    shootout_score,
)
from schedule import AFCON_2025_SLOTS, ScheduleSlot


# ---------------------------------------------------------------------------
# Счёт
# ---------------------------------------------------------------------------

class TestParseScore:

    @pytest.mark.parametrize("text", ["2–1", "2-1", " 2 – 1 ", "2–1 (a.e.t.)"])
    def test_played(self, text):
        assert parse_score(text) == ("2", "1", True)

    @pytest.mark.parametrize("text", ["", None, "v", "Match 12", "TBD"])
    def test_not_played(self, text):
        assert parse_score(text) == ("-", "-", False)

    def test_penalties_after_marker(self):
        assert parse_penalties("1–1 (a.e.t.) Penalties 4–3") == ("4", "3")

    def test_penalties_suffix(self):
        assert parse_penalties("1–1 (5–4 p)") == ("5", "4")

    def test_no_penalties(self):
        assert parse_penalties("2–1") is None
        assert parse_penalties("21 December 2025 (2025-12-21)") is None
        assert parse_penalties(None) is None


# ---------------------------------------------------------------------------
# Даты, время, имена
# ---------------------------------------------------------------------------

class TestParseWikiDate:

    def test_full_month(self):
        assert parse_wiki_date("30 December 2025 (2025-12-30)") == "30-12-2025"

    def test_pads_day(self):
        assert parse_wiki_date("5 January 2026") == "05-01-2026"

    def test_abbreviated_month(self):
        assert parse_wiki_date("3 Jan 2026") == "03-01-2026"
        assert parse_wiki_date("14 Sept 2026") == "14-09-2026"

    def test_unknown_month(self):
        assert parse_wiki_date("3 Smarch 2026") == "03-00-2026"

    def test_passthrough(self):
        assert parse_wiki_date("  TBD  ") == "TBD"
        assert parse_wiki_date("2025-12-21") == "2025-12-21"

    def test_empty(self):
        assert parse_wiki_date("") == ""
        assert parse_wiki_date(None) == ""


class TestParseKickoff:

    def test_extracts_hh_mm(self):
        assert parse_kickoff("20:00 WAT (UTC+1)") == "20:00"
        assert parse_kickoff("9:30") == "09:30"

    def test_missing_time_defaults(self):
        assert parse_kickoff("") == "00:00"
        assert parse_kickoff(None) == "00:00"

    def test_non_time_passthrough(self):
        assert parse_kickoff("TBD") == "TBD"


class TestCleanTeamName:

    def test_strips_footnotes_and_newlines(self):
        assert clean_team_name("\nMorocco[a]\n") == "Morocco"
        assert clean_team_name("DR\xa0Congo [12]") == "DR Congo"

    def test_empty(self):
        assert clean_team_name(None) == ""


# ---------------------------------------------------------------------------
# Карточки матчей
# ---------------------------------------------------------------------------

class TestParseMatchBox:

    def test_played_match(self, soup_of, match_box):
        box = soup_of(match_box("Morocco", "Comoros", "2–0")).find(class_="footballbox")
        match = parse_match_box(box)

        assert match.time == FULL_TIME
        assert match.kickoff == "20:00"
        assert match.date == "21-12-2025"
        assert match.to_dict() == {
            "team": [
                {"name": "Morocco", "image": "https://flagsapi.com/MA/flat/64.png", "score": "2"},
                {"name": "Comoros", "image": "https://flagsapi.com/KM/flat/64.png", "score": "0"},
            ],
            "info": {"date": "21-12-2025", "time": "Full time"},
        }

    def test_scheduled_match(self, soup_of, match_box):
        box = soup_of(match_box("Mali", "Zambia", "v", "22 December 2025", "15:00")).find(
            class_="footballbox"
        )
        match = parse_match_box(box)
        assert not match.played
        assert match.time == "15:00"
        assert [t.score for t in match.teams] == ["-", "-"]

    def test_missing_time(self, soup_of, match_box):
        box = soup_of(match_box("Mali", "Zambia", "v", "22 December 2025", "")).find(
            class_="footballbox"
        )
        assert parse_match_box(box).time == "00:00"

    def test_penalty_shootout(self, soup_of, match_box):
        box = soup_of(
            match_box("Egypt", "South Africa", "1–1 (a.e.t.)", penalties="4–3")
        ).find(class_="footballbox")
        match = parse_match_box(box)
        assert [t.score for t in match.teams] == ["1 (4)", "1 (3)"]
        assert match.played

    def test_shootout_score_between_shooter_lists(self, soup_of, match_box):
        box = soup_of(
            match_box(
                "Egypt",
                "South Africa",
                "1–1 (a.e.t.)",
                penalties="4–3",
                shooters=("Salah Marmoush Trézéguet", "Tau Foster Mokoena"),
            )
        ).find(class_="footballbox")
        assert shootout_score(box) == ("4", "3")
        assert [t.score for t in parse_match_box(box).teams] == ["1 (4)", "1 (3)"]

    def test_shootout_score_inline_text(self, soup_of):
        html = (
            '<div class="footballbox"><span class="fhome">Mali</span>'
            '<span class="fscore">0–0 (5–4 p)</span><span class="faway">Ghana</span></div>'
        )
        box = soup_of(html).find("div")
        assert shootout_score(box) == ("5", "4")
        assert [t.score for t in parse_match_box(box).teams] == ["0 (5)", "0 (4)"]

    def test_no_shootout(self, soup_of, match_box):
        box = soup_of(match_box("Morocco", "Comoros", "2–0")).find(class_="footballbox")
        assert shootout_score(box) is None

    def test_unknown_team_has_empty_image(self, soup_of, match_box):
        box = soup_of(match_box("Winner Group A", "Runner-up Group C")).find(
            class_="footballbox"
        )
        match = parse_match_box(box)
        assert [t.image for t in match.teams] == ["", ""]

    def test_box_without_team_name_rejected(self, soup_of):
        html = (
            '<div class="footballbox"><span class="fhome"> </span>'
            '<span class="fscore">v</span><span class="faway">Mali</span></div>'
        )
        assert parse_match_box(soup_of(html).find("div")) is None


# ---------------------------------------------------------------------------
# Страница целиком
# ---------------------------------------------------------------------------

class TestParseGames:

    def test_boxes_in_document_order(self, soup_of, tournament_html):
        games = parse_games(soup_of(tournament_html))
        assert [g.teams[0].name for g in games] == ["Senegal", "Morocco", "Egypt"]

    def test_results_table_uses_slots(self, soup_of, page, results_table):
        rows = [["Group A", f"Home{i}", "v", f"Away{i}", "Rabat"] for i in range(27)]
        rows[0][2] = "2–0"
        soup = soup_of(page(results_table(rows, stage=True)))

        games = parse_games(soup)

        assert len(games) == 27
        first = games[0]
        assert first.time == FULL_TIME
        assert (first.date, first.kickoff) == (AFCON_2025_SLOTS[0].date, AFCON_2025_SLOTS[0].time)
        # 24 и 25 — одновременные матчи третьего тура
        assert games[24].date == games[25].date
        assert games[24].time == games[25].time == AFCON_2025_SLOTS[24].time
        assert games[26].time == AFCON_2025_SLOTS[25].time

    def test_rejected_rows_do_not_consume_slots(self, soup_of, page, results_table):
        slots = (ScheduleSlot("01-01-2026", "10:00"), ScheduleSlot("02-01-2026", "11:00"))
        rows = [["", "v", "", "-"], ["Mali", "v", "Zambia", "Rabat"]]
        games = parse_games(soup_of(page(results_table(rows))), slots=slots)
        assert len(games) == 1
        assert (games[0].date, games[0].time) == ("01-01-2026", "10:00")

    def test_empty_page(self, soup_of, page):
        assert parse_games(soup_of(page("<p>no matches</p>"))) == []


def test_match_record_played_flag():
    teams = (ParticipantRecord("A", "", "-"), ParticipantRecord("B", "", "-"))
    assert not MatchRecord(teams, "", "18:00", "18:00").played
    assert MatchRecord(teams, "", FULL_TIME, "18:00").played
