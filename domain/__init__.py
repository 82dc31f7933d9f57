"""Domain layer for hospital meal fulfillment.

Holds the diet chart aggregate, the meal preparation state machine and the
caller identity model, independent of GraphQL and of the storage backend.
"""
