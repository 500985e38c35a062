from .app import CorporateCombatApp, run_textual_app

__all__ = ["CorporateCombatApp", "run_textual_app"]
