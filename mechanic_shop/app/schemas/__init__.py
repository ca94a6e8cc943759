"""
Pydantic schema definitions for shop records.

Each entity (customers, mechanics, cars, service requests) defines its
own Pydantic models.  The constrained field types they share live in
``fields`` so that the interactive prompts check single fields against
exactly the same rules the models enforce.
"""
