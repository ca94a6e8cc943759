"""
Service layer abstraction.

Each service encapsulates the statements for one part of the shop.
Services receive the open ``DataStore`` as their first argument and
trust their inputs to be validated schema objects; the prompts and the
schemas do the checking before anything reaches a service.
"""
