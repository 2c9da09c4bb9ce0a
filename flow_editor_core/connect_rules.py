"""
Connection rules for interactive edge drawing.

The validator decides, when a connect gesture starts, whether the new edge
would break a degree constraint declared in the node type registry. Rules are
an explicit ordered pipeline; the first rule that rejects wins and later rules
are not evaluated, so a single rejection reason is ever reported.

Registered on an event bus, the validator listens to ``connect.start`` above
the engine's default priority. On rejection it stops propagation, prevents the
default action and hands the verdict to the notifier synchronously, before any
commit handler can run.
"""

import logging
from typing import Callable, List, Optional

from .event_bus import CONNECT_START, Event, EventBus
from .models import (
    ConnectionAttempt, ConnectionVerdict, GraphNode, ViolationSide
)
from .node_types import NodeTypeRegistry, get_registry


CONNECT_RULES_PRIORITY = 1500

REASON_SOURCE_OUTGOING = "source_outgoing_limit"
REASON_TARGET_INCOMING = "target_incoming_limit"

ConnectionRule = Callable[[ConnectionAttempt, NodeTypeRegistry, str], Optional[ConnectionVerdict]]
Notifier = Callable[[ConnectionVerdict], None]


def source_outgoing_rule(attempt: ConnectionAttempt, registry: NodeTypeRegistry,
                         locale: str = "en") -> Optional[ConnectionVerdict]:
    """Reject when the source already holds all the outgoing edges its type allows."""
    source = attempt.source
    if source is None:
        return None
    descriptor = registry.get(source.type)
    if descriptor.allows_more_outgoing(source.outgoing_count):
        return None
    return ConnectionVerdict.reject(
        REASON_SOURCE_OUTGOING,
        descriptor.message(ViolationSide.SOURCE, locale),
        ViolationSide.SOURCE,
        source,
    )


def target_incoming_rule(attempt: ConnectionAttempt, registry: NodeTypeRegistry,
                         locale: str = "en") -> Optional[ConnectionVerdict]:
    """Reject when the target already holds all the incoming edges its type allows."""
    target = attempt.target
    if target is None:
        return None
    descriptor = registry.get(target.type)
    if descriptor.allows_more_incoming(target.incoming_count):
        return None
    return ConnectionVerdict.reject(
        REASON_TARGET_INCOMING,
        descriptor.message(ViolationSide.TARGET, locale),
        ViolationSide.TARGET,
        target,
    )


DEFAULT_RULES: List[ConnectionRule] = [source_outgoing_rule, target_incoming_rule]


class ConnectionRuleValidator:
    """Evaluates connection attempts against the registered degree rules."""

    def __init__(self, registry: Optional[NodeTypeRegistry] = None,
                 rules: Optional[List[ConnectionRule]] = None,
                 notify: Optional[Notifier] = None,
                 locale: str = "en"):
        self.logger = logging.getLogger(__name__)
        self.registry = registry or get_registry()
        self.rules: List[ConnectionRule] = list(DEFAULT_RULES if rules is None else rules)
        self.notify = notify
        self.locale = locale
        self._event_bus: Optional[EventBus] = None

    def add_rule(self, rule: ConnectionRule, index: Optional[int] = None):
        """Append a rule, or insert it at a position in the pipeline."""
        if index is None:
            self.rules.append(rule)
        else:
            self.rules.insert(index, rule)

    def validate(self, source: Optional[GraphNode] = None,
                 target: Optional[GraphNode] = None) -> ConnectionVerdict:
        """Validate a connection from source to target; either may be None."""
        return self.evaluate(ConnectionAttempt(source=source, target=target))

    def evaluate(self, attempt: ConnectionAttempt) -> ConnectionVerdict:
        """Run the rule pipeline and return the first rejection, or ACCEPT."""
        self._trace(attempt)
        for rule in self.rules:
            verdict = rule(attempt, self.registry, self.locale)
            if verdict is not None and not verdict.accepted:
                self.logger.info("Connection rejected (%s) on %s %s",
                                 verdict.reason, verdict.node_type, verdict.node_id)
                return verdict
        return ConnectionVerdict.accept()

    # ------------------------------------------------------------------
    # Event bus integration
    # ------------------------------------------------------------------

    def register(self, event_bus: EventBus, priority: int = CONNECT_RULES_PRIORITY):
        """Subscribe to connect-start gestures on the given bus."""
        event_bus.on(CONNECT_START, self.on_connect_start, priority)
        self._event_bus = event_bus

    def unregister(self):
        if self._event_bus is not None:
            self._event_bus.off(CONNECT_START, self.on_connect_start)
            self._event_bus = None

    def on_connect_start(self, event: Event) -> ConnectionVerdict:
        """Veto a connect gesture that breaks a degree rule."""
        verdict = self.validate(event.context.get('source'), event.context.get('target'))
        event.context['verdict'] = verdict
        if not verdict.accepted:
            event.stop_propagation()
            event.prevent_default()
            if self.notify is not None:
                self.notify(verdict)
        return verdict

    def _trace(self, attempt: ConnectionAttempt):
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        source, target = attempt.source, attempt.target
        self.logger.debug(
            "connect.start source=%s (in=%s out=%s) target=%s (in=%s out=%s)",
            source.type if source else None,
            source.incoming_count if source else None,
            source.outgoing_count if source else None,
            target.type if target else None,
            target.incoming_count if target else None,
            target.outgoing_count if target else None,
        )
