"""HR records package.

Organized by feature modules (employees, departments, attendance, ...) with a
thin Flask controller layer over service and repository layers.
"""
