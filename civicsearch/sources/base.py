"""Source adapter interface."""

from typing import Mapping, Protocol, Union

from civicsearch.models import EntityType, SourceResult

# e.g. {"pageSize": "500", "sort": "state_code,district"}
SearchCriteria = Mapping[str, str]


class SourceAdapter(Protocol):
    """Protocol for services that retrieve raw records for one entity type."""

    entity_type: EntityType

    async def search(
        self, criteria: SearchCriteria
    ) -> Union[SourceResult, Mapping[str, object]]:
        """Return the records matching ``criteria``.

        Raises:
            SourceError: If the source could not produce a result at all
        """
        ...


class SourceError(Exception):
    """Raised when a source adapter fails to produce a result."""
    pass
