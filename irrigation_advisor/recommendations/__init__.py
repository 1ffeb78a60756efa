"""
Irrigation advisory engine: ranks forecast days, classifies single days, and
partitions the ranking for alerting.

Modules
-------
scorer     : ScoreComponents dataclass + compute_score() + build_reasoning()
             (pure functions, no I/O).
ranker     : score_day() + rank_irrigation_days() - best-first ranking with
             skipped-day reporting.
classifier : classify_day() - boolean decision ladder with rationale lines.
aggregator : partition_recommendations() + summarize_best_days()
             + condition_summary().
reporter   : write_ranking_csv() + write_advisory_json() - file output.
"""
