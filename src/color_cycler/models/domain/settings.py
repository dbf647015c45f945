"""Global settings domain model"""

from dataclasses import dataclass, field
from typing import Any, Dict

from color_cycler.models.enums import ContextID
from color_cycler.models.domain.context import ContextSettings

SCHEMA_VERSION = 4


class UnknownContextError(KeyError):
    """Raised when an explicit context id is not one of base/dark/light"""


def _default_contexts() -> Dict[ContextID, ContextSettings]:
    return {context_id: ContextSettings() for context_id in ContextID}


@dataclass
class GlobalSettings:
    """
    Root settings object (persisted wholesale as one record)

    Owned by the application and passed by reference to the cycle engine,
    timer scheduler and context selector. Mutated in place.
    """
    show_status_indicator: bool = False
    show_ribbon_icon: bool = True
    use_separate_contexts: bool = False
    contexts: Dict[ContextID, ContextSettings] = field(default_factory=_default_contexts)
    version: int = SCHEMA_VERSION

    def get_context(self, context_id: ContextID) -> ContextSettings:
        try:
            return self.contexts[ContextID(context_id)]
        except (KeyError, ValueError):
            raise UnknownContextError(context_id) from None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "showStatusIndicator": self.show_status_indicator,
            "showRibbonIcon": self.show_ribbon_icon,
            "useSeparateContexts": self.use_separate_contexts,
            "contexts": {
                context_id.value: self.contexts[context_id].to_dict()
                for context_id in ContextID
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GlobalSettings':
        contexts_data = data.get("contexts") or {}
        return cls(
            show_status_indicator=bool(data.get("showStatusIndicator", False)),
            show_ribbon_icon=bool(data.get("showRibbonIcon", True)),
            use_separate_contexts=bool(data.get("useSeparateContexts", False)),
            contexts={
                context_id: ContextSettings.from_dict(contexts_data.get(context_id.value) or {})
                for context_id in ContextID
            },
            version=SCHEMA_VERSION,
        )
