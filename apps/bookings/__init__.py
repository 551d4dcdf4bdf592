"""Bookings app package.

This app encapsulates the booking engine: admission of booking requests
(pricing and conflict detection), the booking lifecycle state machine,
and the persistence, API and scheduled jobs around them. Overlapping
occupancy is prevented by per-house row locks during admission and
approval, and by an exclusion constraint on PostgreSQL.
"""
