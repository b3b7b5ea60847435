"""AvaTax sync backend package.

Holds the configuration-save validation flow and the invoice persistence
hooks that keep the AvaTax submission queue in step with invoice creation.
"""

__all__: list[str] = []
