"""Time clock package.

Organized by feature modules (attendance, reports, users) with a thin Flask
controller layer over service/repository layers.
"""
