"""
Scheduler App - Periodic Report Snapshots

Responsibilities:
- Scheduled execution (cron via APScheduler, REPORT_SCHEDULE_CRON)
- Generate a habits report and a tasks report on every run
- Persist both reports; one failing domain does not stop the other
- RUN_ONCE mode for a single immediate snapshot

Output:
- One new row in habits_reports and in tasks_reports per run
"""
