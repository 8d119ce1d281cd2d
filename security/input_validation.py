# security/input_validation.py

import logging
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from core.color_space import HEX_COLOR_PATTERN
from core.models import ImageRecord, SearchFilters

logger = logging.getLogger(__name__)

class InputValidator:
    """
    Validate loose record and filter data before it reaches the engine
    """

    MAX_COLORS = 3
    PROCESSING_STATUSES = {'pending', 'processing', 'completed', 'failed'}
    METADATA_FIELDS = ('tags', 'description', 'colors')

    @staticmethod
    def normalize_hex_color(value: Any) -> Optional[str]:
        """
        Return value as an uppercase #RRGGBB string, or None if malformed
        """
        if not isinstance(value, str):
            return None
        value = value.strip()
        if not HEX_COLOR_PATTERN.match(value):
            return None
        return value.upper()

    @staticmethod
    def normalize_tags(value: Any) -> Tuple[str, ...]:
        """Lowercase, trimmed, non-empty tags; order and duplicates are kept"""
        if value is None:
            return ()
        if isinstance(value, str) or not isinstance(value, Iterable):
            logger.warning("Ignoring tags of unexpected type %s", type(value).__name__)
            return ()

        tags = []
        for tag in value:
            if not isinstance(tag, str):
                continue
            tag = tag.strip().lower()
            if tag:
                tags.append(tag)
        return tuple(tags)

    @staticmethod
    def normalize_description(value: Any) -> Optional[str]:
        """Trimmed description, None when absent or blank"""
        if not isinstance(value, str):
            return None
        value = value.strip()
        return value or None

    @staticmethod
    def normalize_colors(value: Any, record_id: Any = None) -> Tuple[Optional[str], ...]:
        """
        Validate up to MAX_COLORS palette entries

        Malformed entries become None so they still count in palette
        averages with zero similarity.
        """
        if value is None:
            return ()
        if isinstance(value, str) or not isinstance(value, Iterable):
            logger.warning("Ignoring colors of unexpected type %s on image %r",
                           type(value).__name__, record_id)
            return ()

        colors = []
        for raw in list(value)[:InputValidator.MAX_COLORS]:
            color = InputValidator.normalize_hex_color(raw)
            if color is None:
                logger.warning("Malformed color %r on image %r", raw, record_id)
            colors.append(color)
        return tuple(colors)

    @staticmethod
    def parse_record(raw: Mapping[str, Any]) -> Optional[ImageRecord]:
        """
        Build an ImageRecord from a data store row

        Metadata may be flat on the row or nested under a 'metadata' key.
        Rows without an id are rejected.
        """
        if not isinstance(raw, Mapping):
            logger.warning("Skipping record of unexpected type %s", type(raw).__name__)
            return None

        record_id = raw.get('id')
        if record_id is None:
            logger.warning("Skipping record without id")
            return None

        if 'metadata' in raw:
            metadata = raw.get('metadata')
            if not isinstance(metadata, Mapping):
                metadata = None
        elif any(key in raw for key in InputValidator.METADATA_FIELDS):
            metadata = raw
        else:
            metadata = None

        extra = {
            key: value for key, value in raw.items()
            if key not in ('id', 'metadata') + InputValidator.METADATA_FIELDS
        }

        if metadata is None:
            return ImageRecord(id=record_id, has_metadata=False, extra=extra)

        status = metadata.get('ai_processing_status', metadata.get('status'))
        if status not in InputValidator.PROCESSING_STATUSES:
            status = None

        return ImageRecord(
            id=record_id,
            tags=InputValidator.normalize_tags(metadata.get('tags')),
            description=InputValidator.normalize_description(metadata.get('description')),
            colors=InputValidator.normalize_colors(metadata.get('colors'), record_id),
            has_metadata=True,
            status=status,
            extra=extra
        )

    @staticmethod
    def parse_records(raw_records: Any) -> List[ImageRecord]:
        """Parse a collection, skipping rows that cannot be used"""
        if not raw_records:
            return []
        records = []
        for raw in raw_records:
            record = InputValidator.parse_record(raw)
            if record is not None:
                records.append(record)
        return records

    @staticmethod
    def parse_filters(raw: Optional[Mapping[str, Any]]) -> SearchFilters:
        """
        Build SearchFilters from snake_case or camelCase keys

        Blank values count as absent.
        """
        if not raw:
            return SearchFilters()

        def pick(*keys):
            for key in keys:
                value = raw.get(key)
                if isinstance(value, str):
                    value = value.strip() or None
                if value is not None:
                    return value
            return None

        text_query = pick('text_query', 'textQuery', 'text')
        color = pick('color', 'color_filter', 'colorFilter')
        similar_to = pick('similar_to', 'similarToImageId')

        return SearchFilters(
            text_query=text_query if isinstance(text_query, str) else None,
            color=color if isinstance(color, str) else None,
            similar_to=similar_to
        )
