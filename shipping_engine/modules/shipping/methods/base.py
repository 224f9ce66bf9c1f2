"""
Base Shipping Method Interface

All shipping method plugins implement this interface. A plugin is the
rate-calculation strategy behind a configured ShippingMethod; the same
plugin class can back many methods with different configuration.

Each plugin provides its own:
  - Services (the tiers it can quote)
  - Rate calculation for a shipment
  - Rate selection (recording the chosen rate on the shipment)
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Dict, List, Optional

from shipping_engine.core.config import settings
from shipping_engine.models.price import Price
from shipping_engine.models.rate import ShippingRate, ShippingService
from shipping_engine.models.shipment import PackageType, Shipment
from shipping_engine.models.weight import Weight


class BaseShippingMethod(ABC):
    """
    Abstract base class for all shipping method plugins.

    Subclasses set plugin_id / label (the registry fills plugin_id in) and
    implement calculate_rates().
    """

    plugin_id = "base"
    label = "Generic shipping method"

    def __init__(self, configuration: Optional[Dict[str, Any]] = None, parent_method_id: Optional[str] = None):
        """
        Initialize the plugin.

        Args:
            configuration: Plugin settings (rate_label, rate_amount, default_package_type, ...)
            parent_method_id: Id of the ShippingMethod this plugin instance belongs to
        """
        self.configuration: Dict[str, Any] = {**self.default_configuration(), **(configuration or {})}
        self.parent_method_id = parent_method_id
        self.services: Dict[str, ShippingService] = self.build_services()

    def default_configuration(self) -> Dict[str, Any]:
        return {
            "default_package_type": settings.SHIPPING_DEFAULT_PACKAGE_TYPE,
            "services": [],
        }

    def build_services(self) -> Dict[str, ShippingService]:
        """Services offered by this plugin, keyed by service id."""
        services = {}
        for service in self.configuration.get("services") or []:
            if isinstance(service, ShippingService):
                services[service.id] = service
            else:
                services[service["id"]] = ShippingService(service["id"], service["label"])
        return services

    def get_config_value(self, key: str, default: Any = None) -> Any:
        return self.configuration.get(key, default)

    def get_config_price(self, key: str) -> Price:
        """Read a {"number": ..., "currency_code": ...} price from configuration."""
        value = self.configuration[key]
        if isinstance(value, Price):
            return value
        return Price.from_dict(value)

    def get_default_package_type(self) -> PackageType:
        """
        Package type used when a shipment doesn't specify one.

        Configuration may hold a PackageType or a dict with id/label/weight.
        """
        package_type = self.configuration.get("default_package_type")
        if isinstance(package_type, PackageType):
            return package_type
        if isinstance(package_type, dict):
            weight = package_type.get("weight") or {"number": "0", "unit": "g"}
            return PackageType(
                id=package_type["id"],
                label=package_type.get("label", package_type["id"]),
                weight=Weight(weight["number"], weight["unit"]),
            )
        if package_type == settings.SHIPPING_DEFAULT_PACKAGE_TYPE or not package_type:
            return PackageType(
                id=settings.SHIPPING_DEFAULT_PACKAGE_TYPE,
                label=settings.SHIPPING_DEFAULT_PACKAGE_LABEL,
                weight=Weight(Decimal("0"), "g"),
            )
        return PackageType(id=package_type, label=package_type)

    @abstractmethod
    def calculate_rates(self, shipment: Shipment) -> List[ShippingRate]:
        """
        Calculate rates for the given shipment.

        May raise; the shipment manager logs the error and skips this method.
        """
        pass

    def select_rate(self, shipment: Shipment, rate: ShippingRate) -> None:
        """Record the chosen rate on the shipment."""
        shipment.shipping_service = rate.service.id
        shipment.amount = rate.amount

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(plugin_id={self.plugin_id}, parent={self.parent_method_id})>"
