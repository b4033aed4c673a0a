"""Turn the model's suggestions into links into the companion app."""

from campus_companion.ai.chat.constants import APP_LINK_PREFIX, ItemKind
from campus_companion.ai.chat.schemas import RawSuggestion, SuggestedLink
from campus_companion.utils.logger import logger

KNOWN_KINDS = frozenset(kind.value for kind in ItemKind)


def build_item_url(kind: str, item_id: str) -> str:
    """App-relative URL for an item, e.g. /app/resources/<id>."""
    return f"{APP_LINK_PREFIX}/{kind}s/{item_id}"


def map_suggested_links(
    suggestions: list[RawSuggestion],
    limit: int,
    known_items: set[tuple[str, str]] | None = None,
) -> list[SuggestedLink]:
    """
    Map suggestions to links, keeping model order.

    Suggestions with an unknown kind or an empty id are dropped. Ids are
    UUIDs and are lower-cased. When `known_items` is given, suggestions
    whose (kind, id) is not in it are dropped too. At most `limit` links are returned.

    Args:
        suggestions: Validated suggestions from the completion
        limit: Maximum number of links
        known_items: (kind, id) pairs that exist, or None to skip the check

    Returns:
        list[SuggestedLink]: Links ready for the response
    """
    links: list[SuggestedLink] = []
    for suggestion in suggestions:
        if len(links) >= limit:
            break
        kind = suggestion.type.strip().lower()
        item_id = suggestion.id.strip().lower()
        if kind not in KNOWN_KINDS or not item_id:
            logger.info("Dropping suggestion with unknown kind or empty id", kind=kind)
            continue
        if known_items is not None and (kind, item_id) not in known_items:
            logger.info(
                "Dropping suggestion not found in context", kind=kind, item_id=item_id
            )
            continue
        links.append(SuggestedLink(title=suggestion.title, url=build_item_url(kind, item_id)))
    return links
