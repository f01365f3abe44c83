import logging

from analysis.core_analysis import Combatants, CoreAnalysisConfig
from analysis.data import ACTIONS, Data
from analysis.dragoon_analysis import DragoonAnalysisConfig
from analysis.hooks import EventHooks
from analysis.output import ReportSink
from console_table import SHOULD_PRINT
from report import Fight, Report


class Analyzer:
    JOB_ANALYSIS_CONFIGS = {
        "Default": CoreAnalysisConfig,
        "Dragoon": DragoonAnalysisConfig,
    }

    DRAGOON_ACTIONS = {
        ACTIONS.FULL_THRUST.id,
        ACTIONS.CHAOS_THRUST.id,
        ACTIONS.FANG_AND_CLAW.id,
        ACTIONS.WHEELING_THRUST.id,
        ACTIONS.RAIDEN_THRUST.id,
        ACTIONS.COERTHAN_TORMENT.id,
        ACTIONS.LIFE_SURGE.id,
        ACTIONS.DRAGON_SIGHT.id,
    }

    def __init__(self, fight: Fight, data: Data = None):
        self._fight = fight
        self._data = data or Data()
        self._events = self._filter_events()
        self.__job = None
        self._analysis_config = self.JOB_ANALYSIS_CONFIGS.get(
            self._detect_job(),
            self.JOB_ANALYSIS_CONFIGS["Default"],
        )()
        self._sink = ReportSink()
        self._analyzers = []

    def _detect_job(self):
        if not self.__job:

            def detect():
                for event in self._events:
                    if (
                        event["type"] == "cast"
                        and event["sourceID"] == self._fight.source.id
                        and event.get("abilityGameID") in self.DRAGOON_ACTIONS
                    ):
                        return "Dragoon"
                return None

            self.__job = detect()
        return self.__job

    def _filter_events(self):
        """Remove any events we don't care to analyze"""
        events = []
        source = self._fight.source

        for event in self._fight.events:
            # We're neither the source nor the target
            if (
                event.get("sourceID") != source.id
                and event.get("targetID") != source.id
                and event.get("sourceID") not in source.pets
                and event.get("targetID") not in source.pets
            ):
                continue

            events.append(event)
        return events

    def _preprocess_events(self, status_tracker, invuln):
        for event in self._events:
            status_tracker.preprocess_event(event)

        # enemies going untargetable never involve the player
        for event in self._fight.events:
            invuln.preprocess_event(event)

    def analyze(self):
        status_tracker = self._analysis_config.create_status_tracker(self._fight)
        invuln = self._analysis_config.create_invulnerability_tracker(self._fight)
        self._preprocess_events(status_tracker, invuln)

        combatants = Combatants(self._fight, status_tracker)
        self._analyzers = self._analysis_config.get_analyzers(
            self._fight,
            combatants,
            status_tracker,
            invuln,
            self._data,
            self._sink,
        )

        hooks = EventHooks()
        for analyzer in self._analyzers:
            analyzer.register(hooks)

        for event in self._events:
            hooks.dispatch(event)
        hooks.complete()

        analysis = {}
        for analyzer in self._analyzers:
            analysis.update(**analyzer.report())
            if SHOULD_PRINT:
                analyzer.print()

        logging.info(
            f"Analyzed {len(self._events)} events for {self._fight.source.name}"
            f" ({self._detect_job() or 'unknown job'})"
        )

        return {
            "fight_metadata": {
                "source": self._fight.source.name,
                "encounter": self._fight.encounter.name,
                "start_time": self._fight.start_time,
                "end_time": self._fight.end_time,
                "duration": self._fight.duration,
            },
            "job": self._detect_job(),
            "analysis": analysis,
            **self._sink.report(),
        }


def analyze(report: Report, fight_id: int):
    fight = report.get_fight(fight_id)
    analyzer = Analyzer(fight)
    return analyzer.analyze()
