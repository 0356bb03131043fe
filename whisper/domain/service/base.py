"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the business rules that span entities, such as
    visibility checks, reply threading and metric aggregation.
    """

    pass
