"""
Fonctions utilitaires partagees dans le projet jellymal.

- now_millis : horloge murale en millisecondes epoch
"""

import time


def now_millis() -> int:
    """Horloge murale en millisecondes epoch."""
    return int(time.time() * 1000)
