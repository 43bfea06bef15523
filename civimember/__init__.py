"""Membership renewal reminders, membership payments and scheduled job registry."""
