"""Registry application for the posyandu admin API.

Guardian/child records, visit history and profile photos are read and
written through a hosted backend; this package holds the services,
serializers, views and route registrations in front of it.
"""
