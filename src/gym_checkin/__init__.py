"""Gym check-in kiosk package.

Organized by feature modules (memberships, attendance, scan, members, kiosk)
with a thin Flask controller layer over service/repository layers.
"""
