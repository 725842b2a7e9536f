"""Answer "did it rain here in the last 24 hours?" from Open-Meteo observations."""
