"""
Tasks App - Tasks Reporting

Responsibilities:
- Fetch every task from the tasks provider
- Count completed tasks (on time vs late), delayed tasks and open tasks
  (including those due today)
- Persist reports to the tasks_reports table and read them back by id

Database Schema:
- tasks_reports(report_id, completed_total, completed_on_time, completed_late,
  delayed_tasks, available_total, available_due_today)
"""
