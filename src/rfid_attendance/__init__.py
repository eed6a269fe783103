"""RFID attendance scan core.

This package is organized by feature modules (persons, attendance, mailbox, ...)
with a thin Flask controller layer and service/repository layers behind it.
"""
