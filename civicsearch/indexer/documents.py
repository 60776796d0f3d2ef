"""Turn normalized records into search index documents."""

from __future__ import annotations

import re
from typing import Any, Iterable, List, Optional, Tuple, assert_never

from civicsearch.identifiers import IdentifierEncoder
from civicsearch.models import EntityType, IndexDocument, NormalizedRecord

DEFAULT_DOMAIN = "app.civil.services"
DEFAULT_LIFETIME_MINUTES = 1440

WHITESPACE_PATTERN = re.compile(r"\s+")


def collapse_whitespace(value: Any) -> str:
    """Collapse whitespace runs to single spaces and trim the ends."""

    if value is None:
        return ""
    return WHITESPACE_PATTERN.sub(" ", str(value)).strip()


def title_case(value: Any) -> str:
    """Upper-case the first letter of every word and lower-case the rest."""

    words = collapse_whitespace(value).split(" ")
    return " ".join(word[:1].upper() + word[1:].lower() for word in words if word)


def describe(record: NormalizedRecord, name: str) -> Tuple[str, str, Tuple[str, ...]]:
    """Return ``(title, description, keywords)`` for a record.

    Missing location fields render as empty text; the description is
    whitespace-collapsed afterwards so it never starts with a blank.
    """

    role = title_case(record.get("title"))
    state_name = collapse_whitespace(record.get("state_name"))
    entity_type = record.data_type

    match entity_type:
        case EntityType.HOUSE:
            title = f"{role} {name}"
            description = f"{state_name} U.S. House {role} {name}"
            keyword_text = description
        case EntityType.SENATE:
            title = f"{role} {name}"
            description = f"{state_name} U.S. {role} {name}"
            keyword_text = description
        case EntityType.GOVERNOR:
            title = f"{role} {name}"
            description = f"{state_name} U.S. State Governor {role} {name}"
            keyword_text = description
        case EntityType.CITY_COUNCIL:
            city_name = collapse_whitespace(record.get("city_name"))
            state_code = collapse_whitespace(record.get("state_code"))
            title = f"{role} {name}"
            description = f"{city_name}, {state_code} - City {role} {name}"
            # Only the separators introduced by the template are stripped.
            keyword_text = description.replace(" - ", " ", 1).replace(",", "", 1)
        case EntityType.STATE:
            title = f"State of {name}"
            description = f"Information on U.S. State {name}"
            keyword_text = description
        case _:
            assert_never(entity_type)

    return (
        collapse_whitespace(title),
        collapse_whitespace(description),
        tuple(keyword_text.split()),
    )


class DocumentBuilder:
    """Builds index documents and assigns their public identifiers."""

    def __init__(
        self,
        encoder: IdentifierEncoder,
        domain: str = DEFAULT_DOMAIN,
        lifetime: int = DEFAULT_LIFETIME_MINUTES,
    ):
        self.encoder = encoder
        self.domain = domain
        self.lifetime = lifetime

    def build(self, records: Iterable[NormalizedRecord]) -> List[IndexDocument]:
        """Build documents in input order.

        The ordinal used for the identifier counts every record, including
        the ones dropped for an empty name.
        """

        documents: List[IndexDocument] = []
        for ordinal, record in enumerate(records):
            document = self.build_document(ordinal, record)
            if document is not None:
                documents.append(document)
        return documents

    def build_document(
        self, ordinal: int, record: NormalizedRecord
    ) -> Optional[IndexDocument]:
        name = collapse_whitespace(record.get("name"))
        if not name:
            return None

        title, description, keywords = describe(record, name)
        return IndexDocument(
            domain=self.domain,
            identifier=self.encoder.encode(ordinal),
            title=title,
            description=description,
            url=record.get("civil_services_url"),
            keywords=keywords,
            lifetime=self.lifetime,
        )


__all__ = [
    "DEFAULT_DOMAIN",
    "DEFAULT_LIFETIME_MINUTES",
    "DocumentBuilder",
    "collapse_whitespace",
    "describe",
    "title_case",
]
