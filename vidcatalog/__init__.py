"""
VidCatalog - Resolution d'un catalogue video uniforme.

Ce package transforme des collections video heterogenes (arborescences locales,
partages reseau domestiques, catalogues distants) en un catalogue uniforme
d'elements lisibles, selectionne le meilleur flux encode pour les elements
distants et met en cache les pages resolues pour une navigation instantanee.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur)
- services/ : Couche application (scan, selection de flux, cache, catalogue)
- adapters/ : Couche infrastructure (systeme de fichiers)
"""
