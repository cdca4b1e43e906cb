from .client import GeolocationClient, is_public_ip

__all__ = ["GeolocationClient", "is_public_ip"]
