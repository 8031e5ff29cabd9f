"""Общие HTML-фикстуры в разметке, похожей на страницу турнира в Википедии."""

import pytest
from bs4 import BeautifulSoup

STANDINGS_HEADER = (
    "<tr><th>Pos</th><th>Team <span>v t e</span></th><th>Pld</th><th>W</th>"
    "<th>D</th><th>L</th><th>GF</th><th>GA</th><th>GD</th><th>Pts</th>"
    "<th>Qualification</th></tr>"
)


def _team_row(pos, name, w, d, l, host=False, link=True):
    flag = '<span class="flagicon"><a href="/wiki/File:x.svg" class="image"><img src="x.png"></a></span>'
    label = f'<a href="/wiki/{name}">{name}</a>' if link else name
    suffix = " (H)" if host else ""
    return (
        f"<tr><td>{pos}</td><th>{flag} {label}{suffix}</th>"
        f"<td>3</td><td>{w}</td><td>{d}</td><td>{l}</td>"
        f"<td>5</td><td>2</td><td>+3</td><td>7</td><td>Advance to knockout stage</td></tr>"
    )


def _standings_table(rows):
    return f'<table class="wikitable">{STANDINGS_HEADER}{"".join(rows)}</table>'


def _match_box(
    home,
    away,
    score="v",
    date="21 December 2025 (2025-12-21)",
    time="20:00 WAT",
    penalties=None,
    shooters=("Salah Marmoush", "Tau Foster"),
):
    pen = ""
    if penalties:
        # строка серии: пенальтисты хозяев, счёт в голом <th>, пенальтисты гостей
        pen = (
            '<tr><th colspan="3">Penalties</th></tr>'
            f'<tr><td class="fhgoal">{shooters[0]}</td><th>{penalties}</th>'
            f'<td class="fagoal">{shooters[1]}</td></tr>'
        )
    return (
        '<div class="footballbox">'
        f'<div class="fleft"><div class="fdate">{date}</div><div class="ftime">{time}</div></div>'
        "<table><tr>"
        f'<th class="fhome"><span class="flagicon"></span> <a href="/wiki/{home}">{home}</a></th>'
        f'<th class="fscore">{score}</th>'
        f'<th class="faway"><a href="/wiki/{away}">{away}</a> <span class="flagicon"></span></th>'
        f"</tr>{pen}</table>"
        "</div>"
    )


def _results_table(rows, stage=False):
    head = "<tr>" + ("<th>Stage</th>" if stage else "") + "<th>Home</th><th>Score</th><th>Away</th><th>Venue</th></tr>"
    body = []
    for row in rows:
        if isinstance(row, str):
            body.append(row)
            continue
        cells = "".join(f"<td>{c}</td>" for c in row)
        body.append(f"<tr>{cells}</tr>")
    return f'<table class="wikitable">{head}{"".join(body)}</table>'


def _bracket_table():
    return (
        "<table><tr><td>Round of 16</td><td>Quarter-finals</td><td>Semi-finals</td><td>Final</td></tr>"
        "<tr><td>Morocco</td><td>2</td></tr><tr><td>Tanzania</td><td>0</td></tr></table>"
    )


def _page(*parts):
    return "<html><body>" + "".join(parts) + "</body></html>"


@pytest.fixture
def team_row():
    return _team_row


@pytest.fixture
def standings_table():
    return _standings_table


@pytest.fixture
def match_box():
    return _match_box


@pytest.fixture
def results_table():
    return _results_table


@pytest.fixture
def page():
    return _page


@pytest.fixture
def soup_of():
    return lambda html: BeautifulSoup(html, "lxml")


@pytest.fixture
def tournament_html():
    """Две группы, три карточки матчей (одна сыграна по пенальти), сетка."""
    group_a = _standings_table(
        [
            _team_row(1, "Morocco", 2, 1, 0, host=True),
            _team_row(2, "Mali", 1, 2, 0),
            _team_row(3, "Zambia", 0, 2, 1),
            _team_row(4, "Comoros", 0, 1, 2),
        ]
    )
    group_f = _standings_table(
        [
            _team_row(1, "Ivory Coast", 2, 1, 0),
            _team_row(2, "Cameroon", 2, 1, 0),
        ]
    )
    boxes = [
        _match_box("Senegal", "Botswana", "v", "5 January 2026", "17:00 WAT"),
        _match_box("Morocco", "Comoros", "2–0", "21 December 2025 (2025-12-21)", "20:00 WAT"),
        _match_box("Egypt", "South Africa", "1–1 (a.e.t.)", "3 Jan 2026", "20:00", penalties="4–3"),
    ]
    return _page(
        "<h2>Group A</h2>", group_a,
        "<h2>Group F</h2>", group_f,
        *boxes,
        "<h2>Knockout stage</h2>", _bracket_table(),
    )
