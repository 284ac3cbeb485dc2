# Services module
#
# Import services from their modules (app.services.booking_service, ...).
# Schemas import app.services.aggregation, so nothing is imported here.
