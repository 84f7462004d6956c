"""
Tests unitaires pour CatalogService.

Ces tests verifient:
- La resolution d'une page locale puis sa lecture depuis le cache
- La resolution d'une page reseau via le catalogue distant
- La navigation dossier par dossier bornee a la racine de la source
- La resolution du flux lisible d'une video distante
"""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from vidcatalog.adapters.file_system import FileSystemAdapter
from vidcatalog.core.entities.catalog import SourceKind, VideoSource
from vidcatalog.core.ports.remote_catalog import RemotePage, RemoteVideo
from vidcatalog.core.value_objects.streams import AudioTrack, StreamVariant
from vidcatalog.services.catalog import CatalogService, UnknownSourceError
from vidcatalog.services.folder_scanner import FolderScanner
from vidcatalog.services.navigation_cache import NavigationCache
from vidcatalog.services.stream_selector import NoSuitableStreamError, StreamSelector
from vidcatalog.utils.helpers import make_local_video_id


@pytest.fixture
def navigation_cache(fake_clock) -> NavigationCache:
    return NavigationCache(clock=fake_clock, prefetch_delay=0)


@pytest.fixture
def catalog(
    navigation_cache: NavigationCache,
    mock_remote_catalog: AsyncMock,
    local_source: VideoSource,
    network_source: VideoSource,
) -> CatalogService:
    """Catalogue avec une source locale reelle et une source reseau mockee."""
    return CatalogService(
        folder_scanner=FolderScanner(FileSystemAdapter()),
        stream_selector=StreamSelector(preferred_languages=["en"]),
        navigation_cache=navigation_cache,
        remote_catalog=mock_remote_catalog,
        page_size=2,
        sources=[local_source, network_source],
    )


class TestCatalogServiceSources:
    """Tests pour le registre des sources."""

    def test_get_source_returns_registered_source(
        self, catalog: CatalogService, local_source: VideoSource
    ) -> None:
        """Une source enregistree est retrouvee par son identifiant."""
        assert catalog.get_source("local-1") == local_source

    def test_unknown_source_raises(self, catalog: CatalogService) -> None:
        """Une source inconnue leve UnknownSourceError."""
        with pytest.raises(UnknownSourceError):
            catalog.get_source("absent")

    @pytest.mark.asyncio
    async def test_get_page_unknown_source_raises(self, catalog: CatalogService) -> None:
        """get_page() sur une source inconnue leve UnknownSourceError."""
        with pytest.raises(UnknownSourceError):
            await catalog.get_page("absent", 1)


class TestCatalogServiceLocalPages:
    """Tests pour les pages des sources locales."""

    @pytest.mark.asyncio
    async def test_get_page_resolves_local_source(
        self, catalog: CatalogService, local_source: VideoSource
    ) -> None:
        """La premiere page contient les deux premieres videos de la source."""
        page = await catalog.get_page("local-1", 1)

        assert [v.title for v in page.videos] == ["intro", "Tai Otoshi"]
        assert page.pagination.total_videos == 5
        assert page.pagination.total_pages == 3
        assert page.source == local_source

    @pytest.mark.asyncio
    async def test_get_page_is_served_from_cache(
        self, catalog: CatalogService, navigation_cache: NavigationCache
    ) -> None:
        """Une seconde lecture retourne l'objet mis en cache."""
        first = await catalog.get_page("local-1", 1)
        second = await catalog.get_page("local-1", 1)

        assert second is first
        assert navigation_cache.get_source_metadata("local-1") is not None

    @pytest.mark.asyncio
    async def test_get_page_prefetches_next_page(
        self, catalog: CatalogService, navigation_cache: NavigationCache
    ) -> None:
        """Apres la page 1, la page 2 est prechargee en arriere-plan."""
        await catalog.get_page("local-1", 1)
        for _ in range(5):
            await asyncio.sleep(0)

        cached = navigation_cache.get_page("local-1", 2)
        assert cached is not None
        assert [v.title for v in cached.videos] == ["uki", "deeper"]

    @pytest.mark.asyncio
    async def test_page_below_one_is_cached_as_first_page(
        self, catalog: CatalogService, navigation_cache: NavigationCache
    ) -> None:
        """get_page(source, 0) sert et met en cache la page 1."""
        page = await catalog.get_page("local-1", 0)

        assert page.pagination.current_page == 1
        assert navigation_cache.get_page("local-1", 1) is page
        assert navigation_cache.get_page("local-1", 0) is None
        assert await catalog.get_page("local-1", 1) is page

    @pytest.mark.asyncio
    async def test_reset_source_clears_cached_pages(
        self, catalog: CatalogService, navigation_cache: NavigationCache
    ) -> None:
        """reset_source() vide les pages et metadonnees de la source."""
        await catalog.get_page("local-1", 1)

        catalog.reset_source("local-1")

        assert navigation_cache.get_page("local-1", 1) is None
        assert navigation_cache.get_source_metadata("local-1") is None


class TestCatalogServiceNetworkPages:
    """Tests pour les pages des sources reseau."""

    @pytest.mark.asyncio
    async def test_get_page_uses_remote_catalog(
        self,
        catalog: CatalogService,
        mock_remote_catalog: AsyncMock,
        network_source: VideoSource,
    ) -> None:
        """Les videos distantes sont converties en VideoItem reseau."""
        mock_remote_catalog.fetch_page.return_value = RemotePage(
            videos=(
                RemoteVideo(id="abc", title="Kata", url="https://example.com/watch?v=abc",
                            thumbnail="https://example.com/abc.jpg", duration=95),
            ),
            total_results=1,
        )

        page = await catalog.get_page("channel-1", 1)

        mock_remote_catalog.fetch_page.assert_awaited_once_with(network_source, 1, 2)
        video = page.videos[0]
        assert video.id == "abc"
        assert video.source_kind is SourceKind.NETWORK
        assert video.duration == 95
        assert page.pagination.total_pages == 1

    @pytest.mark.asyncio
    async def test_remote_errors_are_propagated(
        self, catalog: CatalogService, mock_remote_catalog: AsyncMock
    ) -> None:
        """Une erreur du catalogue distant remonte a l'appelant."""
        mock_remote_catalog.fetch_page.side_effect = ConnectionError("hors ligne")

        with pytest.raises(ConnectionError):
            await catalog.get_page("channel-1", 1)

    @pytest.mark.asyncio
    async def test_network_source_without_remote_catalog_raises(
        self, navigation_cache: NavigationCache, network_source: VideoSource
    ) -> None:
        """Sans catalogue distant, une source reseau ne peut pas etre resolue."""
        catalog = CatalogService(
            folder_scanner=MagicMock(spec=FolderScanner),
            stream_selector=StreamSelector(),
            navigation_cache=navigation_cache,
            sources=[network_source],
        )

        with pytest.raises(RuntimeError):
            await catalog.get_page("channel-1", 1)


class TestCatalogServiceFolders:
    """Tests pour la navigation dossier par dossier."""

    def test_root_folder_contents(self, catalog: CatalogService) -> None:
        """Sans chemin, la racine de la source est listee."""
        contents = catalog.get_folder_contents("local-1")

        assert [f.name for f in contents.folders] == ["judo", "karate"]

    def test_subfolder_contents_keep_source_relative_ids(
        self, catalog: CatalogService, video_tree: Path
    ) -> None:
        """Les identifiants restent relatifs a la racine de la source."""
        contents = catalog.get_folder_contents("local-1", video_tree / "karate", depth=2)

        assert [v.id for v in contents.videos] == [
            make_local_video_id(video_tree / "karate" / "kata.mov", video_tree)
        ]

    def test_path_outside_source_returns_empty(
        self, catalog: CatalogService, tmp_path: Path
    ) -> None:
        """Un chemin hors de la racine de la source donne un resultat vide."""
        contents = catalog.get_folder_contents("local-1", tmp_path)

        assert contents.folders == ()
        assert contents.videos == ()

    def test_parent_segments_cannot_escape_source(
        self, catalog: CatalogService, video_tree: Path, tmp_path: Path
    ) -> None:
        """'racine/../private' est hors de la source malgre le prefixe textuel."""
        private = tmp_path / "private"
        private.mkdir()
        (private / "secret.mp4").touch()

        contents = catalog.get_folder_contents("local-1", video_tree / ".." / "private")

        assert contents.folders == ()
        assert contents.videos == ()

    def test_parent_segments_inside_source_are_normalized(
        self, catalog: CatalogService, video_tree: Path
    ) -> None:
        """'racine/judo/../karate' liste karate avec des identifiants normalises."""
        contents = catalog.get_folder_contents(
            "local-1", video_tree / "judo" / ".." / "karate", depth=2
        )

        assert [v.relative_path for v in contents.videos] == ["karate/kata.mov"]
        assert contents.videos[0].url == str(video_tree / "karate" / "kata.mov")

    def test_network_source_has_no_folders(self, catalog: CatalogService) -> None:
        """Une source reseau n'a pas de navigation par dossier."""
        contents = catalog.get_folder_contents("channel-1")

        assert contents.videos == ()


class TestCatalogServiceStreams:
    """Tests pour resolve_stream()."""

    @pytest.mark.asyncio
    async def test_resolve_stream_selects_best_pair(
        self, catalog: CatalogService, mock_remote_catalog: AsyncMock
    ) -> None:
        """Le flux retenu combine la meilleure video et l'audio prefere."""
        mock_remote_catalog.fetch_streams.return_value = (
            [
                StreamVariant(mime_type="video/mp4", url="https://cdn/720.mp4", height=720),
                StreamVariant(mime_type="video/mp4", url="https://cdn/1080.mp4", height=1080),
            ],
            [
                AudioTrack(mime_type="audio/mp4", url="https://cdn/en.m4a", language="en"),
                AudioTrack(mime_type="audio/mp4", url="https://cdn/fr.m4a", language="fr"),
            ],
        )

        stream = await catalog.resolve_stream("abc", preferred_languages=["fr"])

        mock_remote_catalog.fetch_streams.assert_awaited_once_with("abc")
        assert stream.references == ("https://cdn/1080.mp4", "https://cdn/fr.m4a")

    @pytest.mark.asyncio
    async def test_resolve_stream_propagates_selection_errors(
        self, catalog: CatalogService, mock_remote_catalog: AsyncMock
    ) -> None:
        """Seulement des manifestes : NoSuitableStreamError."""
        mock_remote_catalog.fetch_streams.return_value = (
            [StreamVariant(mime_type="video/mp4", url="https://cdn/master.m3u8", height=1080)],
            [],
        )

        with pytest.raises(NoSuitableStreamError):
            await catalog.resolve_stream("abc")
