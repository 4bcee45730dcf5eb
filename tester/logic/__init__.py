"""Core comparison and capture logic; no script-host concerns live here."""
