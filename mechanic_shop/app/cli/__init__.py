"""
Interactive console front end.

``prompts`` validates what the operator types, ``render`` prints query
results and ``menu`` ties the shop operations to the numbered menu.
"""
