"""Classroom Attendance package.

This package is organized by feature modules (classes, attendance, invites, ...)
with a thin Flask controller layer and service/repository layers.
"""
