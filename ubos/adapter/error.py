"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class EmailDeliveryError(AdapterError):
    """Outbound email could not be handed to the mail server."""

    pass


class CredentialStoreError(AdapterError):
    """Password hash could not be computed or stored."""

    pass
