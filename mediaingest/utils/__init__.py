"""Utilitaires partages (constantes, helpers de concurrence)."""
