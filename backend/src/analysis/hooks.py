import logging


class EventsCompleted(Exception):
    pass


class Hook:
    def __init__(self, event_type, handler, by=None, ability_id=None):
        self.event_type = event_type
        self.handler = handler
        self.by = by
        self.ability_id = ability_id

    def matches(self, event):
        if event["type"] != self.event_type:
            return False
        if self.by is not None and event.get("sourceID") != self.by:
            return False
        if self.ability_id is not None and event.get("abilityGameID") != self.ability_id:
            return False
        return True


class EventHooks:
    """
    Subscription registry, analyzers register their handlers once before
    dispatching starts. Handlers run in registration order.
    """

    def __init__(self):
        self._hooks = []
        self._complete_hooks = []
        self._completed = False

    @property
    def completed(self):
        return self._completed

    def add_hook(self, event_type, handler, by=None, ability_id=None):
        if event_type == "complete":
            self._complete_hooks.append(handler)
        else:
            self._hooks.append(Hook(event_type, handler, by, ability_id))

    def dispatch(self, event):
        if self._completed:
            raise EventsCompleted(
                f"Received {event['type']} event at {event.get('timestamp')} after completion"
            )

        for hook in self._hooks:
            if hook.matches(event):
                hook.handler(event)

    def complete(self):
        if self._completed:
            raise EventsCompleted("Events were already completed")

        self._completed = True
        logging.debug(f"Completing {len(self._complete_hooks)} hooks")
        for handler in self._complete_hooks:
            handler()
