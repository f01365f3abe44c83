from typing import List


class UnknownFight(Exception):
    pass


class Encounter:
    def __init__(self, name):
        self.name = name


class Source:
    def __init__(self, id, name, pets=None, starting_auras=None):
        self.id = id
        self.name = name
        self.pets = set(pets or [])
        self.starting_auras = starting_auras or []


class Fight:
    def __init__(
        self,
        id,
        start_time,
        end_time,
        encounter: Encounter,
        source: Source,
        events: List[dict],
        boss_ids=None,
    ):
        self.id = id
        self.start_time = start_time
        self.end_time = end_time
        self.encounter = encounter
        self.source = source
        self.boss_ids = set(boss_ids or [])
        self.events = self._normalize_events(events)

    @property
    def duration(self):
        return self.end_time - self.start_time

    def _normalize_events(self, events):
        """Keep this fight's events, with timestamps relative to the pull"""
        normalized = []

        for event in events:
            if not self.start_time <= event["timestamp"] <= self.end_time:
                continue
            normalized.append({**event, "timestamp": event["timestamp"] - self.start_time})
        return sorted(normalized, key=lambda e: e["timestamp"])


class Report:
    def __init__(self, report_data: dict):
        metadata = report_data.get("metadata", {})
        self.end_time = metadata.get("end_time")
        self._events = report_data.get("events", [])
        self._fights = report_data.get("fights", [])
        self._actors = report_data.get("actors", [])
        self._combatant_info = report_data.get("combatant_info", {})
        self.source = self._get_source(metadata["source_id"], metadata.get("source_name"))

    def _get_source(self, source_id, source_name):
        pets = [
            actor["id"] for actor in self._actors if actor.get("petOwner") == source_id
        ]
        if source_name is None:
            source_name = next(
                (a["name"] for a in self._actors if a["id"] == source_id), "Unknown"
            )
        combatant_info = self._combatant_info.get(str(source_id), {})
        starting_auras = [
            {"targetID": source_id, "abilityGameID": aura["ability"]}
            for aura in combatant_info.get("auras", [])
        ]
        return Source(source_id, source_name, pets, starting_auras)

    def get_fight(self, fight_id: int) -> Fight:
        for fight in self._fights:
            if fight["id"] == fight_id:
                return Fight(
                    fight["id"],
                    fight["start_time"],
                    fight["end_time"],
                    Encounter(fight.get("encounter_name")),
                    self.source,
                    self._events,
                    boss_ids=fight.get("boss_ids"),
                )
        raise UnknownFight(f"Fight {fight_id} not found in report")
