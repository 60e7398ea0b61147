"""Content catalog: read-only lookup of songs and formation templates."""

from __future__ import annotations

from collections.abc import Iterable
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from drillbook.core.catalog.models import SongData
from drillbook.core.drill.models import FormationTemplate

logger = logging.getLogger(__name__)


@runtime_checkable
class ContentCatalog(Protocol):
    """Resolves song and template ids. Unknown ids return None."""

    def get_song(self, song_id: str) -> SongData | None: ...

    def get_template(self, template_id: str) -> FormationTemplate | None: ...

    def list_songs(self) -> list[SongData]: ...

    def list_templates(self) -> list[FormationTemplate]: ...


class InMemoryContentCatalog:
    """Catalog backed by dicts, optionally seeded from a JSON/YAML file.

    File layout::

        songs:
          - {id: fight, title: Fight Song, bpm: 132, total_beats: 256}
        templates:
          - {id: block, name: Block, slots: [...]}
    """

    def __init__(
        self,
        songs: Iterable[SongData] = (),
        templates: Iterable[FormationTemplate] = (),
    ) -> None:
        self._songs = {s.id: s for s in songs}
        self._templates = {t.id: t for t in templates}

    @classmethod
    def from_file(cls, path: Path | str) -> InMemoryContentCatalog:
        """Load a catalog file (.json, .yaml, or .yml).

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the format is unsupported or the content invalid
            ValidationError: If an entry does not describe a valid song/template
        """
        from drillbook.core.config.loader import load_config

        raw = load_config(path)
        catalog = cls(
            songs=(SongData.model_validate(s) for s in raw.get("songs") or []),
            templates=(FormationTemplate.model_validate(t) for t in raw.get("templates") or []),
        )
        logger.debug(
            "Loaded catalog %s: %d songs, %d templates",
            path,
            len(catalog._songs),
            len(catalog._templates),
        )
        return catalog

    def add_song(self, song: SongData) -> None:
        self._songs[song.id] = song

    def add_template(self, template: FormationTemplate) -> None:
        self._templates[template.id] = template

    def get_song(self, song_id: str) -> SongData | None:
        song = self._songs.get(song_id)
        if song is None:
            logger.warning("ContentCatalog: song not found: %s", song_id)
        return song

    def get_template(self, template_id: str) -> FormationTemplate | None:
        template = self._templates.get(template_id)
        if template is None:
            logger.warning("ContentCatalog: template not found: %s", template_id)
        return template

    def list_songs(self) -> list[SongData]:
        return sorted(self._songs.values(), key=lambda s: s.title)

    def list_templates(self) -> list[FormationTemplate]:
        return sorted(self._templates.values(), key=lambda t: t.name)
