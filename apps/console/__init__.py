"""
Console app - the task console client.

Talks to the task API over HTTP and keeps a local view-model of the
collection, filters, form and notices. Run with `python manage.py console`.
"""
