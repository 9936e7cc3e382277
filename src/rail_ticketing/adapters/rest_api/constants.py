"""Constants for the ticketing REST API adapter.

Paths are relative to the configured base URL. Connection search may be served
from its own base URL (see ``AppConfig.search_base_url``).
"""

# Reference data
STATIONS_PATH = "/system-lists/stations"  # GET
NEAREST_STATION_PATH = "/stations/nearest"  # GET ?latitude&longitude
DISCOUNTS_PATH = "/system-lists/discounts"  # GET

# Search
CONNECTIONS_PATH = "/connections"  # GET ?startStationId&endStationId&departureTime

# Purchase
DISCOUNT_CODE_PATH = "/discount-codes/{code}"  # GET
TICKET_PRICE_PATH = "/tickets/price"  # POST
TICKETS_PATH = "/tickets"  # POST
CARD_PAYMENT_PATH = "/tickets/payment/card"  # POST

# Ticket lifecycle
USER_TICKETS_PATH = "/tickets/{user_id}"  # GET ?type&pageNumber&pageSize
TICKET_DETAILS_PATH = "/tickets/{ticket_id}/details"  # GET
TICKET_QR_CODE_PATH = "/tickets/qr-code/{qr_code_id}"  # GET, PNG body
TICKET_CANCEL_PATH = "/tickets/{ticket_id}/cancel"  # POST, empty body
REFUND_REQUEST_PATH = "/tickets/refund-request"  # POST
TICKET_ARRIVALS_PATH = "/tickets/{ticket_id}/arrivals"  # GET

# HTTP headers
DEFAULT_HEADERS = {
    "Accept": "application/json",
}
