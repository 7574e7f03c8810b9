"""
Studies: runnable demonstrations of the Crying Baby problem.

Each study runs the model and reports what happened.
Watch the trajectory before reasoning about it.

Study progression:
1. Always feed - the canonical ten-step run with a fixed policy
2. Feed when crying - reacting to observations, compared across policies
"""
