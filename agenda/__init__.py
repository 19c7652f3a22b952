"""Appointment booking API for a small service business."""
