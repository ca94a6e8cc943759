"""
Application package initializer.

The shop is organised into logical pieces: ``core`` (configuration,
logging, the data store and errors), ``schemas`` (validated record
models), ``services`` (statements and reports) and ``cli`` (the
interactive menu).  ``main`` wires them together.
"""
