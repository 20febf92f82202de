"""HR attendance backend.

Organized by feature modules (users, attendance, workdays, ...) with a thin
Flask controller layer on top of service/repository layers. The monthly
reconciliation engine lives in ``attendance.reconciler``.
"""
