import logging
from typing import List, Optional

from analysis.base import BaseAnalyzer
from analysis.core_analysis import (
    Combatants,
    CoreAnalysisConfig,
    InvulnerabilityTracker,
    StatusTracker,
)
from analysis.data import ACTIONS, STATUSES, Data
from analysis.output import (
    PieChartRow,
    PieChartStatistic,
    ReportSink,
    Requirement,
    Rule,
    Severity,
    Suggestion,
    TieredSuggestion,
)
from console_table import console, print_pie_chart
from report import Fight


class DisplayOrder:
    DISEMBOWEL = 1


BAD_LIFE_SURGE_CONSUMERS = [
    ACTIONS.TRUE_THRUST.id,
    ACTIONS.RAIDEN_THRUST.id,
    ACTIONS.VORPAL_THRUST.id,
    ACTIONS.DISEMBOWEL.id,
    ACTIONS.CHAOS_THRUST.id,
    ACTIONS.PIERCING_TALON.id,
    ACTIONS.DOOM_SPIKE.id,
    ACTIONS.SONIC_THRUST.id,
    ACTIONS.COERTHAN_TORMENT.id,
]

FINAL_COMBO_HITS = [
    ACTIONS.FANG_AND_CLAW.id,
    ACTIONS.WHEELING_THRUST.id,
]

# these are the consumers shown in the chart, anything else is "Other".
# Fang and Claw, Wheeling Thrust and Coerthan Torment can also be bad usages,
# so the "Other" slice only equals bad_usages when none of them were penalized.
CHART_LIFE_SURGE_CONSUMERS = [
    ACTIONS.FULL_THRUST.id,
    ACTIONS.FANG_AND_CLAW.id,
    ACTIONS.WHEELING_THRUST.id,
    ACTIONS.COERTHAN_TORMENT.id,
]

CHART_COLORS = {
    ACTIONS.FULL_THRUST.id: "#0e81f7",
    ACTIONS.FANG_AND_CLAW.id: "#18cee7",
    ACTIONS.WHEELING_THRUST.id: "#ce1010",
    ACTIONS.COERTHAN_TORMENT.id: "#9452ff",
}

OTHER_ACTION_COLOR = "#616161"

LIFE_SURGE_TIERS = {
    1: Severity.MINOR,
    2: Severity.MEDIUM,
    4: Severity.MAJOR,
}


class LifeSurgeState:
    def __init__(self):
        # action ids of every GCD cast while Life Surge was up, in cast order
        self.casts: List[int] = []
        self.bad_usages = 0
        # set after a final combo hit so the following 5th hit isn't counted again
        self.fifth_gcd = False
        self.solo_dragon_sight = False
        self.completed = False


def classify_cast(state: LifeSurgeState, action_id, has_life_surge):
    if has_life_surge:
        state.casts.append(action_id)

    if action_id in BAD_LIFE_SURGE_CONSUMERS:
        state.fifth_gcd = False
        if has_life_surge:
            state.bad_usages += 1
    elif action_id in FINAL_COMBO_HITS:
        # 4th and 5th combo hits in a row, only the first one is considered bad
        if not state.fifth_gcd:
            state.fifth_gcd = True
            if has_life_surge:
                state.bad_usages += 1
    else:
        state.fifth_gcd = False


def disembowel_uptime_percent(status_uptime, fight_duration, invulnerable_uptime):
    fight_uptime = fight_duration - invulnerable_uptime
    if fight_uptime <= 0:
        logging.warning(
            f"Fight has no vulnerable time ({fight_duration}ms, {invulnerable_uptime}ms invulnerable)"
        )
        return 0.0
    return (status_uptime / fight_uptime) * 100


def life_surge_cast_percent(value, total):
    return f"{(value / total) * 100:.2f}%"


def action_label(data: Data, action_id):
    action = data.get_action(action_id)
    if action is None:
        logging.warning(f"Unknown action {action_id} in Life Surge chart")
        return ""
    return action.name


class BuffsReport:
    def __init__(
        self,
        disembowel_uptime,
        rule,
        life_surge_suggestion,
        dragon_sight_suggestion,
        chart,
        total_usages,
        tracked_usages,
        bad_usages,
    ):
        self.disembowel_uptime = disembowel_uptime
        self.rule: Rule = rule
        self.life_surge_suggestion: Optional[TieredSuggestion] = life_surge_suggestion
        self.dragon_sight_suggestion: Optional[Suggestion] = dragon_sight_suggestion
        self.chart: Optional[PieChartStatistic] = chart
        self.total_usages = total_usages
        self.tracked_usages = tracked_usages
        self.bad_usages = bad_usages

    @property
    def other_usages(self):
        return self.total_usages - self.tracked_usages


def life_surge_chart(casts, data: Data):
    total = len(casts)
    rows = []

    # count the consumers we care about (total - tracked is the "Other" slice)
    tracked = 0
    for action_id in CHART_LIFE_SURGE_CONSUMERS:
        value = casts.count(action_id)

        # don't put 0s in the chart
        if value == 0:
            continue

        rows.append(
            PieChartRow(
                label=action_label(data, action_id),
                value=value,
                percent=life_surge_cast_percent(value, total),
                color=CHART_COLORS[action_id],
            )
        )
        tracked += value

    if total - tracked > 0:
        value = total - tracked
        rows.append(
            PieChartRow(
                label="Other",
                value=value,
                percent=life_surge_cast_percent(value, total),
                color=OTHER_ACTION_COLOR,
            )
        )

    chart = None
    if rows:
        chart = PieChartStatistic(
            headings=["Life Surge Consumer", "Count", "%"],
            data=rows,
        )
    return chart, tracked


def reduce_buffs(
    state: LifeSurgeState,
    status_uptime,
    fight_duration,
    invulnerable_uptime,
    data: Data,
) -> BuffsReport:
    uptime = disembowel_uptime_percent(status_uptime, fight_duration, invulnerable_uptime)
    rule = Rule(
        name=f"Keep {ACTIONS.DISEMBOWEL.name} up",
        description=(
            f"{ACTIONS.DISEMBOWEL.name} provides a 10% boost to your personal damage"
            " and should always be kept up."
        ),
        display_order=DisplayOrder.DISEMBOWEL,
        requirements=[
            Requirement(name=f"{ACTIONS.DISEMBOWEL.name} uptime", percent=uptime),
        ],
    )

    times = "time" if state.bad_usages == 1 else "times"
    life_surge_suggestion = TieredSuggestion(
        icon=ACTIONS.LIFE_SURGE.icon,
        content=(
            f"Avoid using {ACTIONS.LIFE_SURGE.name} on any GCD that isn't"
            f" {ACTIONS.FULL_THRUST.name} or a 5th combo hit. Any other combo action"
            " will have significantly less potency, losing a lot of the benefit of"
            " the guaranteed crit."
        ),
        tiers=LIFE_SURGE_TIERS,
        value=state.bad_usages,
        why=(
            f"You used {ACTIONS.LIFE_SURGE.name} on a non-optimal GCD"
            f" {state.bad_usages} {times}."
        ),
    )
    if life_surge_suggestion.severity is None:
        life_surge_suggestion = None

    dragon_sight_suggestion = None
    if state.solo_dragon_sight:
        dragon_sight_suggestion = Suggestion(
            icon=ACTIONS.DRAGON_SIGHT.icon,
            content=(
                "Although it doesn't impact your personal DPS, try to always use"
                f" {ACTIONS.DRAGON_SIGHT.name} on a partner in group content so that"
                " someone else can benefit from the damage bonus too."
            ),
            severity=Severity.MINOR,
            why=f"At least 1 of your {ACTIONS.DRAGON_SIGHT.name} casts didn't have a tether partner.",
        )

    chart, tracked = life_surge_chart(state.casts, data)

    return BuffsReport(
        disembowel_uptime=uptime,
        rule=rule,
        life_surge_suggestion=life_surge_suggestion,
        dragon_sight_suggestion=dragon_sight_suggestion,
        chart=chart,
        total_usages=len(state.casts),
        tracked_usages=tracked,
        bad_usages=state.bad_usages,
    )


class BuffsAnalyzer(BaseAnalyzer):
    def __init__(
        self,
        fight: Fight,
        combatants: Combatants,
        entity_statuses: StatusTracker,
        invuln: InvulnerabilityTracker,
        data: Data,
        sink: ReportSink,
    ):
        self._fight = fight
        self._combatants = combatants
        self._entity_statuses = entity_statuses
        self._invuln = invuln
        self._data = data
        self._sink = sink
        self._state = LifeSurgeState()
        self._result: Optional[BuffsReport] = None

    @property
    def state(self):
        return self._state

    @property
    def result(self):
        return self._result

    def register(self, hooks):
        player_id = self._combatants.selected_id
        hooks.add_hook("cast", self.on_cast, by=player_id)
        hooks.add_hook(
            "applybuff",
            self.on_solo_dragon_sight,
            by=player_id,
            ability_id=STATUSES.RIGHT_EYE_SOLO.id,
        )
        hooks.add_hook("complete", self.on_complete)

    def on_cast(self, event):
        action = self._data.get_action(event["abilityGameID"])
        if not action or not action.on_gcd:
            return

        has_life_surge = self._combatants.has_status(
            STATUSES.LIFE_SURGE.id, event["timestamp"]
        )
        classify_cast(self._state, action.id, has_life_surge)

    def on_solo_dragon_sight(self, event):
        self._state.solo_dragon_sight = True

    def on_complete(self):
        self._state.completed = True

        status_uptime = self._entity_statuses.get_status_uptime(
            STATUSES.DISEMBOWEL.id,
            self._combatants.get_entities(),
            exclude=self._invuln.get_invulnerable_windows(),
        )
        self._result = reduce_buffs(
            self._state,
            status_uptime,
            self._fight.duration,
            self._invuln.get_invulnerable_uptime(),
            self._data,
        )

        self._sink.checklist.add(self._result.rule)
        if self._result.life_surge_suggestion:
            self._sink.suggestions.add(self._result.life_surge_suggestion)
        if self._result.dragon_sight_suggestion:
            self._sink.suggestions.add(self._result.dragon_sight_suggestion)
        if self._result.chart:
            self._sink.statistics.add(self._result.chart)

    def print(self):
        result = self._result
        rule = result.rule

        mark = "[green]✓[/green]" if rule.passed else "[red]x[/red]"
        console.print(
            f"{mark} Your {ACTIONS.DISEMBOWEL.name} uptime was {result.disembowel_uptime:.2f}%"
        )
        if result.life_surge_suggestion:
            console.print(f"[red]x[/red] {result.life_surge_suggestion.why}")
        else:
            console.print(
                f"[green]✓[/green] You always used {ACTIONS.LIFE_SURGE.name} on a good GCD"
            )
        if result.dragon_sight_suggestion:
            console.print(
                f"[red]x[/red] At least 1 of your {ACTIONS.DRAGON_SIGHT.name} casts"
                " didn't have a tether partner"
            )
        if result.chart:
            print_pie_chart(result.chart)

    def report(self):
        result = self._result
        return {
            "disembowel": {
                "uptime": result.disembowel_uptime,
                "passed": result.rule.passed,
            },
            "life_surge": {
                "num_usages": result.total_usages,
                "bad_usages": result.bad_usages,
                "other_usages": result.other_usages,
            },
            "dragon_sight": {
                "solo": self._state.solo_dragon_sight,
            },
        }


class DragoonAnalysisConfig(CoreAnalysisConfig):
    def get_analyzers(self, fight: Fight, combatants, entity_statuses, invuln, data, sink):
        return [
            BuffsAnalyzer(fight, combatants, entity_statuses, invuln, data, sink),
        ]
