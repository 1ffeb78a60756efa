"""
Ingestion layer: turns weather provider forecast files into WeatherDayRecord
objects.

Submodules:
  forecast_file - JSON forecast parser + upcoming-rain helper

The advisory engine itself never fetches or parses; this layer only feeds the
CLI and the AdviseStage.
"""
