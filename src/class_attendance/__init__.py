"""Class Attendance package.

Organized by feature modules (students, sessions, attendance, ...) with a thin
Flask controller layer over service/repository layers.
"""
