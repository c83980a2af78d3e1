"""
Shipment tracking lookups over the externally-owned `tracking_orders` table.
"""
