"""
Habits App - Habits Reporting

Responsibilities:
- Fetch every habit from the habits provider
- Count habits per color category (red, orange, yellow, green, blue)
- Pick the worst and best scored habit (earliest wins ties)
- Persist reports to the habits_reports table and read them back by id

Database Schema:
- habits_reports(report_id, red, orange, yellow, green, blue,
  worst_name, worst_title, best_name, best_title)
"""
