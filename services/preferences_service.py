"""Get and update a user's stored suggestion preferences."""

import logging

from models.entities import PartialSuggestionConfig
from services.config_resolver import DEFAULT_CONFIG, TUNING_FIELDS, resolve_config
from services.validation import validate_preferences

logger = logging.getLogger(__name__)


class PreferencesService:
    """Stored preferences with lazy creation and partial updates."""

    def __init__(self, data_client):
        """Initialize with a store providing get_preferences/save_preferences."""
        self.data_client = data_client

    def get(self, user_id: str) -> PartialSuggestionConfig:
        """Stored preferences with defaults filled in for anything unset."""
        stored = self.data_client.get_preferences(user_id)
        return self._complete(stored)

    def upsert(self, user_id: str, update: PartialSuggestionConfig) -> PartialSuggestionConfig:
        """
        Apply a partial update to the stored preferences.

        Fields left as None keep their stored value; a user without stored
        preferences gets defaults for every field the update leaves unset.
        """
        validate_preferences(update)
        current = self.get(user_id)
        merged = PartialSuggestionConfig(**{
            name: getattr(update, name) if getattr(update, name) is not None else getattr(current, name)
            for name in TUNING_FIELDS
        })
        saved = self.data_client.save_preferences(user_id, merged)
        logger.info("Saved suggestion preferences for user %s", user_id)
        return self._complete(saved)

    @staticmethod
    def _complete(stored) -> PartialSuggestionConfig:
        resolved = resolve_config(DEFAULT_CONFIG, stored)
        return PartialSuggestionConfig(**{name: getattr(resolved, name) for name in TUNING_FIELDS})
