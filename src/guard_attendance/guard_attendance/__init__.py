"""Guard Attendance package.

Daily slot allocation and attendance for security-guard deployments. Organized
by feature modules (slots, assignments, attendance, temporary_slots) with thin
Flask controllers over service/repository layers.
"""
