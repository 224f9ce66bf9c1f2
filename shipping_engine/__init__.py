"""
Shipping Engine

Shipping rate aggregation and selection for e-commerce orders:
- ShipmentManager collects rates from every eligible shipping method
- ShippingRateOptionsBuilder labels rates and picks the default option
- ShipmentOrderProcessor repacks shipments and adds shipping adjustments
"""
__version__ = "1.0.0"
