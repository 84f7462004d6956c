"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- StreamVariant : Variante video encodee (video seule ou combinee)
- AudioTrack : Piste audio separee
- ResolvedStream : Resultat de la selection de flux
- PaginationState : Etat de pagination d'une page de catalogue
- PageData : Page resolue (videos + pagination + metadonnees de source)
"""

from vidcatalog.core.value_objects.pagination import PageData, PaginationState
from vidcatalog.core.value_objects.streams import (
    AudioTrack,
    ResolvedStream,
    StreamVariant,
)

__all__ = [
    "StreamVariant",
    "AudioTrack",
    "ResolvedStream",
    "PaginationState",
    "PageData",
]
