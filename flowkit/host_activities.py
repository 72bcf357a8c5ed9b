"""Activities that map values from the host scope into replies, returns or the scope."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .activity import ActivityContext, ActivityError, Mapper, new_mapper

_logger = logging.getLogger(__name__)


def _mapper_from_settings(settings: Mapping[str, Any], required: bool) -> Mapper | None:
    mappings = settings.get("mappings")
    if mappings is None and required:
        raise ValueError("mappings is required")
    _logger.debug("Mappings: %r", mappings)
    return new_mapper(mappings)


class _MappingActivity:
    def __init__(self, mapper: Mapper | None = None) -> None:
        self.mapper = mapper

    def _results(self, ctx: ActivityContext) -> dict[str, Any]:
        assert self.mapper is not None
        try:
            return self.mapper.apply(ctx.host.scope)
        except ValueError as exc:
            raise ActivityError(str(exc), "", None) from exc


class ReplyActivity(_MappingActivity):
    """Replies to the trigger with values mapped from the host scope."""

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> ReplyActivity:
        """Build the activity from its required ``mappings`` setting."""
        return cls(_mapper_from_settings(settings, required=True))

    def eval(self, ctx: ActivityContext) -> bool:
        if self.mapper is None:
            ctx.host.reply(None, None)
            return True
        ctx.host.reply(self._results(ctx), None)
        return True


class ReturnActivity(_MappingActivity):
    """Sets the host's return value from values mapped from the host scope."""

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> ReturnActivity:
        """Build the activity from its optional ``mappings`` setting."""
        return cls(_mapper_from_settings(settings, required=False))

    def eval(self, ctx: ActivityContext) -> bool:
        if self.mapper is None:
            ctx.host.return_result(None, None)
            return True
        ctx.host.return_result(self._results(ctx), None)
        return True


class MapperActivity(_MappingActivity):
    """Writes values mapped from the host scope back into that scope."""

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> MapperActivity:
        """Build the activity from its required ``mappings`` setting."""
        return cls(_mapper_from_settings(settings, required=True))

    def eval(self, ctx: ActivityContext) -> bool:
        if self.mapper is None:
            return True
        for name, value in self._results(ctx).items():
            ctx.host.scope.set_value(name, value)
        return True