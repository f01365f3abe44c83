import pytest

from fight_events import BOSS_ID, PET_ID, PLAYER_ID
from report import Encounter, Fight, Source


@pytest.fixture
def make_fight():
    def _make_fight(events, start_time=0, end_time=100000, boss_ids=(BOSS_ID,), starting_auras=None):
        source = Source(PLAYER_ID, "Estinien", pets=[PET_ID], starting_auras=starting_auras)
        return Fight(
            1,
            start_time,
            end_time,
            Encounter("The Ultima Weapon"),
            source,
            events,
            boss_ids=boss_ids,
        )

    return _make_fight


@pytest.fixture
def combat_log():
    return {
        "metadata": {
            "report_id": "aBcD1234",
            "fight_id": 3,
            "source_id": PLAYER_ID,
            "source_name": "Estinien",
            "end_time": 1700000000000,
        },
        "fights": [
            {
                "id": 3,
                "start_time": 1000,
                "end_time": 101000,
                "encounter_name": "The Ultima Weapon",
                "boss_ids": [BOSS_ID],
            },
        ],
        "actors": [
            {"id": PLAYER_ID, "name": "Estinien", "type": "Dragoon"},
            {"id": PET_ID, "name": "Chocobo", "type": "Pet", "petOwner": PLAYER_ID},
            {"id": BOSS_ID, "name": "Ultima Weapon", "type": "Boss"},
        ],
        "combatant_info": {},
        "events": [],
    }
