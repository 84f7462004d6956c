"""
Couche adaptateurs (infrastructure).

Implementations concretes des ports du domaine :
- file_system : Lecture du systeme de fichiers reel (pathlib)
"""
