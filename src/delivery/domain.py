"""Delivery bounded context — order fulfillment and last-mile shipment lifecycle.

Customers place orders against priced, finite-stock products; administrators
assemble the resulting shipments into driver routes; drivers advance each
shipment by scanning its code. Uses CQRS: aggregates hold the write model and
a driver manifest projection serves the read side.
"""

from protean.domain import Domain

delivery = Domain(name="delivery")
