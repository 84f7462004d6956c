"""
Fixtures pytest partagees pour les tests VidCatalog.

Ce module contient les fixtures communes utilisees dans les tests:
- Mocks des interfaces (IFileSystem, IRemoteCatalog)
- Settings de test avec chemins temporaires
- Horloge manuelle pour les tests de TTL du cache
- Arborescence video reelle dans tmp_path
"""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from vidcatalog.config import Settings
from vidcatalog.core.entities.catalog import SourceType, VideoSource
from vidcatalog.core.ports.file_system import IFileSystem
from vidcatalog.core.ports.remote_catalog import IRemoteCatalog


class FakeClock:
    """Horloge monotone pilotee manuellement par les tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    """Horloge manuelle injectee dans NavigationCache."""
    return FakeClock()


@pytest.fixture
def mock_file_system() -> MagicMock:
    """
    Mock de IFileSystem pour les tests.

    Le mock implemente toutes les methodes de IFileSystem.
    Les valeurs de retour doivent etre configurees dans chaque test.
    """
    mock = MagicMock(spec=IFileSystem)
    mock.exists.return_value = True
    mock.list_dir.return_value = []
    mock.find_thumbnail.return_value = None
    return mock


@pytest.fixture
def mock_remote_catalog() -> AsyncMock:
    """Mock de IRemoteCatalog (methodes asynchrones)."""
    return AsyncMock(spec=IRemoteCatalog)


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Le fichier .env est ignore pour isoler les tests de l'environnement local.
    """
    return Settings(
        _env_file=None,
        log_file=tmp_path / "logs" / "test.log",
        prefetch_delay_seconds=0,
    )


@pytest.fixture
def video_tree(tmp_path: Path) -> Path:
    """
    Arborescence video reelle pour les tests de scan.

    library/
        intro.mp4
        intro.jpg
        notes.txt
        judo/
            Tai Otoshi.MKV
            otoshi/
                uki.mp4
                deep/
                    deeper.webm
        karate/
            kata.mov
    """
    root = tmp_path / "library"
    (root / "judo" / "otoshi" / "deep").mkdir(parents=True)
    (root / "karate").mkdir()

    (root / "intro.mp4").write_bytes(b"0" * 128)
    (root / "intro.jpg").write_bytes(b"jpg")
    (root / "notes.txt").write_text("pas une video")
    (root / "judo" / "Tai Otoshi.MKV").write_bytes(b"0" * 64)
    (root / "judo" / "otoshi" / "uki.mp4").write_bytes(b"0" * 32)
    (root / "judo" / "otoshi" / "deep" / "deeper.webm").write_bytes(b"0" * 16)
    (root / "karate" / "kata.mov").write_bytes(b"0" * 8)
    return root


@pytest.fixture
def local_source(video_tree: Path) -> VideoSource:
    """Source locale pointant sur l'arborescence de test."""
    return VideoSource(
        id="local-1",
        type=SourceType.LOCAL,
        title="Bibliotheque",
        location=str(video_tree),
        max_depth=2,
    )


@pytest.fixture
def network_source() -> VideoSource:
    """Source reseau (chaine distante)."""
    return VideoSource(
        id="channel-1",
        type=SourceType.YOUTUBE_CHANNEL,
        title="Chaine",
        location="https://example.com/channel/abc",
    )
