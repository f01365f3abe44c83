from typing import Optional


class Action:
    def __init__(self, id, name, on_gcd=False, icon=None):
        self.id = id
        self.name = name
        self.on_gcd = on_gcd
        self.icon = icon

    def __repr__(self):
        return f"<Action {self.id} {self.name}>"


class Status:
    def __init__(self, id, name, icon=None):
        self.id = id
        self.name = name
        self.icon = icon

    def __repr__(self):
        return f"<Status {self.id} {self.name}>"


class _Catalog:
    def __init__(self, *entries):
        self._by_key = {}
        self._by_id = {}
        for key, entry in entries:
            self._by_key[key] = entry
            self._by_id[entry.id] = entry

    def __getattr__(self, key):
        try:
            return self.__dict__["_by_key"][key]
        except KeyError:
            raise AttributeError(key) from None

    def get(self, id):
        return self._by_id.get(id)


ACTIONS = _Catalog(
    # Single target combo
    ("TRUE_THRUST", Action(75, "True Thrust", on_gcd=True, icon="000310")),
    ("VORPAL_THRUST", Action(78, "Vorpal Thrust", on_gcd=True, icon="000312")),
    ("FULL_THRUST", Action(84, "Full Thrust", on_gcd=True, icon="000314")),
    ("DISEMBOWEL", Action(87, "Disembowel", on_gcd=True, icon="000317")),
    ("CHAOS_THRUST", Action(88, "Chaos Thrust", on_gcd=True, icon="000308")),
    ("FANG_AND_CLAW", Action(3554, "Fang and Claw", on_gcd=True, icon="002582")),
    ("WHEELING_THRUST", Action(3556, "Wheeling Thrust", on_gcd=True, icon="002584")),
    ("RAIDEN_THRUST", Action(16479, "Raiden Thrust", on_gcd=True, icon="002592")),
    ("PIERCING_TALON", Action(90, "Piercing Talon", on_gcd=True, icon="000315")),
    # AoE combo
    ("DOOM_SPIKE", Action(86, "Doom Spike", on_gcd=True, icon="000306")),
    ("SONIC_THRUST", Action(7397, "Sonic Thrust", on_gcd=True, icon="002586")),
    ("COERTHAN_TORMENT", Action(16477, "Coerthan Torment", on_gcd=True, icon="002590")),
    # oGCDs
    ("LIFE_SURGE", Action(83, "Life Surge", icon="000304")),
    ("LANCE_CHARGE", Action(85, "Lance Charge", icon="000309")),
    ("JUMP", Action(92, "Jump", icon="002576")),
    ("SPINESHATTER_DIVE", Action(95, "Spineshatter Dive", icon="002580")),
    ("DRAGONFIRE_DIVE", Action(96, "Dragonfire Dive", icon="002578")),
    ("BATTLE_LITANY", Action(3557, "Battle Litany", icon="002585")),
    ("BLOOD_OF_THE_DRAGON", Action(3553, "Blood of the Dragon", icon="002581")),
    ("GEIRSKOGUL", Action(3555, "Geirskogul", icon="002583")),
    ("MIRAGE_DIVE", Action(7399, "Mirage Dive", icon="002588")),
    ("NASTROND", Action(7400, "Nastrond", icon="002589")),
    ("DRAGON_SIGHT", Action(7398, "Dragon Sight", icon="002587")),
    ("STARDIVER", Action(16480, "Stardiver", icon="002593")),
    # Shared
    ("ATTACK", Action(7, "Attack")),
)

STATUSES = _Catalog(
    ("LIFE_SURGE", Status(116, "Life Surge", icon="010304")),
    ("DISEMBOWEL", Status(1914, "Disembowel", icon="010317")),
    ("LANCE_CHARGE", Status(1864, "Lance Charge", icon="010309")),
    ("BATTLE_LITANY", Status(786, "Battle Litany", icon="012578")),
    ("RIGHT_EYE", Status(1910, "Right Eye", icon="012581")),
    ("RIGHT_EYE_SOLO", Status(1453, "Right Eye", icon="012581")),
    ("LEFT_EYE", Status(1454, "Left Eye", icon="012582")),
)


class Data:
    """Read-only action and status lookups"""

    def __init__(self, actions=ACTIONS, statuses=STATUSES):
        self._actions = actions
        self._statuses = statuses

    def get_action(self, action_id) -> Optional[Action]:
        return self._actions.get(action_id)

    def get_status(self, status_id) -> Optional[Status]:
        return self._statuses.get(status_id)
