import pytest


def _teams(board):
    return [row["team_abbr"] for row in board["items"]]


def _players(board):
    return [row["player_id"] for row in board["items"]]


def test_landing_team_boards(client):
    body = client.get("/leaders/").json()
    teams = body["teams"]
    assert list(teams) == ["offensive_ppg", "defensive_ppg", "offense_epa_per_play", "defense_epa_per_play"]
    assert _teams(teams["offensive_ppg"]) == ["KC", "BUF", "LAR", "NYJ", "CAR"]
    # lower is better: fewest points allowed first
    assert _teams(teams["defensive_ppg"]) == ["KC", "BUF", "LAR", "NYJ", "CAR"]
    assert _teams(teams["defense_epa_per_play"]) == ["KC", "NYJ", "BUF", "LAR", "CAR"]

    top = teams["offensive_ppg"]["items"][0]
    assert top == {"rank": 1, "team_abbr": "KC", "team_name": "Kansas City Chiefs",
                   "color": top["color"], "value": 30.0}
    assert teams["offense_epa_per_play"]["items"][0]["value"] == 0.15


def test_landing_player_boards(client):
    players = client.get("/leaders/").json()["players"]
    assert set(players) == {"QB", "RB", "WR"}
    assert _players(players["QB"]) == ["qb1", "qb2", "qb3"]
    assert players["QB"]["key"] == "passing_yards"
    # FB sits in the RB group
    assert _players(players["RB"]) == ["rb1", "fb1"]
    assert _players(players["WR"]) == ["wr1", "wr2"]


def test_landing_board_size(client):
    body = client.get("/leaders/", params={"n": 2}).json()
    assert all(len(b["items"]) == 2 for b in body["teams"].values())
    assert client.get("/leaders/", params={"n": 0}).status_code == 422


def test_team_leaders_any_stat(client):
    body = client.get("/leaders/teams", params={"stat": "offensive_ypg", "n": 1}).json()
    assert body["key"] == "offensive_ypg"
    assert [(r["team_abbr"], r["value"]) for r in body["items"]] == [("KC", 390.0)]


def test_team_leaders_skip_missing(client):
    body = client.get("/leaders/teams", params={"stat": "offense_success_rate"}).json()
    assert _teams(body) == ["KC", "BUF", "LAR", "NYJ"]


def test_player_leaders_lower_is_better(client):
    body = client.get("/leaders/players", params={"position": "QB", "stat": "interceptions"}).json()
    assert body["group"] == "QB"
    assert body["inverted"] is True
    assert _players(body) == ["qb1", "qb2", "qb3"]


def test_player_leaders_qualified(client):
    body = client.get("/leaders/players", params={"position": "RB", "qualified": True}).json()
    assert body["key"] == "rushing_yards"
    assert _players(body) == ["rb1"]


@pytest.mark.parametrize(
    "path, params",
    [
        ("/leaders/players", {"position": "LS"}),
        ("/leaders/players", {"position": "QB", "stat": "bogus"}),
        ("/leaders/teams", {"stat": "nope"}),
    ],
)
def test_bad_requests(client, path, params):
    assert client.get(path, params=params).status_code == 400
