"""CLI command groups for rescuetime_data.

Command groups:
- auth: API key and account management
- fetch: Analytic data reports and the daily summary feed
"""
