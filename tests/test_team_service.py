import pytest

import services.team_service as team_module
from services.team_service import TeamService


TEAMS = [
    {
        "responsible_member": {"id": 1, "name": "Asha Menon"},
        "members": [
            {"id": 2, "name": "Ravi Kumar", "marital_status": "Unmarried", "total_paid": "2000"},
            {"id": 3, "name": "Fatima Shaikh", "marital_status": "Married", "total_paid": 6000},
        ],
        "leaderTotalPaid": "1000",
        "teamTotalPaid": 9000,
    },
    {
        "responsible_member": {"id": 4, "name": "John Dsouza"},
        "members": [],
    },
]


@pytest.fixture()
def api(fake_api, monkeypatch):
    monkeypatch.setattr(team_module, "api_client", fake_api)
    return fake_api


def test_get_team_structure(api, api_error):
    api.respond("GET", "/teams/", TEAMS)
    assert TeamService.get_team_structure() == (True, "Retrieved 2 teams.", TEAMS)

    api.respond("GET", "/teams/", api_error("Forbidden", 403))
    success, _, teams = TeamService.get_team_structure()
    assert success is False
    assert teams == []


def test_fund_stats():
    stats = TeamService.fund_stats({
        "demographics": {"married": 3, "unmarried": 1},
        "financials": {"collected": "10000", "disbursed": 2000, "balance": 8000},
        "system_target": 20000,
    })
    assert stats["total_users"] == 4
    assert stats["per_person_target"] == 5000
    assert stats["to_collect"] == 10000
    assert stats["progress"] == 50.0
    assert stats["spend"] == 2000


def test_fund_stats_without_members():
    stats = TeamService.fund_stats({})
    assert stats["per_person_target"] == 0.0
    assert stats["progress"] == 0.0


def test_team_progress_falls_back_to_global_target():
    progress = TeamService.team_progress(TEAMS[0], 5000)

    assert progress["size"] == 3
    assert progress["leader_target"] == 5000
    assert progress["leader_to_collect"] == 4000
    assert progress["team_target"] == 15000
    assert progress["team_to_collect"] == 6000
    assert progress["team_progress"] == 60.0

    ravi, fatima = progress["members"]
    assert ravi["id"] == "2"
    assert ravi["to_collect"] == 3000
    assert fatima["to_collect"] == 0.0
    assert fatima["progress"] == 120.0


def test_team_progress_prefers_backend_targets():
    team = dict(TEAMS[0], leaderTotalTarget=8000, teamTotalTarget="30000")
    progress = TeamService.team_progress(team, 5000)
    assert progress["leader_target"] == 8000
    assert progress["team_target"] == 30000


@pytest.mark.parametrize("term, leaders", [
    ("", ["Asha Menon", "John Dsouza"]),
    ("john", ["John Dsouza"]),
    ("FATIMA", ["Asha Menon"]),
    ("nobody", []),
])
def test_filter_teams(term, leaders):
    result = TeamService.filter_teams(TEAMS, term)
    assert [t["responsible_member"]["name"] for t in result] == leaders
