"""
Plugin controller: builds the note index on load and keeps it current from vault events.
"""

from typing import List, Optional

from . import events
from .config import NOTE_EXTENSIONS, OPENAI_API_KEY, SUGGESTION_COUNT, get_embedding_provider
from .events import IEventSource, Subscription
from .schemas import PluginSettings
from .search_service import semantic_search
from .settings import SettingsStore
from .vault import IVault, Note
from ..util.logging import logger
from ..vector.builder import IndexBuilder
from ..vector.embeddings import IEmbeddingProvider
from ..vector.index import EmbeddingIndex
from ..vector.types import QueryResult


class SecondBrainPlugin:
    """
    Wires a vault, an event source and an embedding provider to one index.

    The index is owned by the plugin instance. All handlers run serially on
    the caller's thread.
    """

    def __init__(self, vault: IVault, event_source: IEventSource,
                 settings_store: Optional[SettingsStore] = None,
                 provider: Optional[IEmbeddingProvider] = None,
                 suggestion_count: int = SUGGESTION_COUNT):
        self.vault = vault
        self.event_source = event_source
        self.settings_store = settings_store or SettingsStore()
        self.settings = PluginSettings()
        self.suggestion_count = suggestion_count
        self.index = EmbeddingIndex()
        self._provider = provider
        self._subscriptions: List[Subscription] = []

    @property
    def provider(self) -> IEmbeddingProvider:
        if self._provider is None:
            # Read the key lazily so update_api_key takes effect immediately
            self._provider = get_embedding_provider(api_key=self._current_api_key)
        return self._provider

    def _current_api_key(self) -> str:
        return self.settings.api_key or OPENAI_API_KEY

    def load(self) -> None:
        logger.info("Loading Second Brain plugin...")
        self.load_settings()
        self.build_embeddings_index()

        self._subscriptions = [
            self.event_source.subscribe(events.MODIFY, self.on_modify),
            self.event_source.subscribe(events.DELETE, self.on_delete),
            self.event_source.subscribe(events.RENAME, self.on_rename),
            self.event_source.subscribe(events.EDITOR_CHANGE, self.on_editor_change),
        ]

    def unload(self) -> None:
        for subscription in self._subscriptions:
            self.event_source.unsubscribe(subscription)
        self._subscriptions = []

    def load_settings(self) -> PluginSettings:
        self.settings = self.settings_store.load()
        return self.settings

    def save_settings(self) -> None:
        self.settings_store.save(self.settings)

    def update_api_key(self, value: str) -> None:
        self.settings = self.settings.model_copy(update={"api_key": (value or "").strip()})
        self.save_settings()

    def build_embeddings_index(self) -> EmbeddingIndex:
        """Clear the index and embed every markdown note in the vault."""
        documents = (
            (note.path, self.vault.read(note))
            for note in self.vault.get_markdown_files()
        )
        return IndexBuilder(self.provider).rebuild_all(documents, self.index)

    @staticmethod
    def is_indexed_note(note: Note) -> bool:
        return note.extension in NOTE_EXTENSIONS

    def update_file_embedding(self, note: Note) -> None:
        logger.debug(f"Updating embedding for {note.path}")
        content = self.vault.read(note)
        IndexBuilder(self.provider).upsert(note.path, content, self.index)

    def on_modify(self, note: Note) -> None:
        if self.is_indexed_note(note):
            self.update_file_embedding(note)

    def on_delete(self, note: Note) -> None:
        if self.is_indexed_note(note):
            IndexBuilder(self.provider).remove(note.path, self.index)

    def on_rename(self, note: Note, old_path: str) -> None:
        builder = IndexBuilder(self.provider)
        if Note(path=old_path).extension in NOTE_EXTENSIONS:
            builder.remove(old_path, self.index)
        if self.is_indexed_note(note):
            self.update_file_embedding(note)

    def on_editor_change(self, content: str) -> List[QueryResult]:
        suggestions = self.get_suggestions(content, self.suggestion_count)
        logger.log_suggestions(content, suggestions, self.suggestion_count)
        return suggestions

    def get_suggestions(self, query_text: str, top_n: int) -> List[QueryResult]:
        return semantic_search(query_text, top_n, self.index, _embedding_provider=self.provider)
