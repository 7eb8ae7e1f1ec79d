"""
Admin Report API Service - FastAPI Application

Responsibilities:
- Generate and persist reports on demand, redirecting to the stored report
- Serve stored reports by id as JSON
- Translate report pipeline failures into a generic 500 response

Endpoints:
- GET /admin/habits/reports - Generate, store and redirect to a habits report
- GET /admin/habits/reports/{reportId} - Get habits report by id
- GET /admin/tasks/reports - Generate, store and redirect to a tasks report
- GET /admin/tasks/reports/{reportId} - Get tasks report by id
- GET /health - Health check
"""
