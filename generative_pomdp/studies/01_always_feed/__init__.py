"""
Study 01: Always Feed

The canonical demonstration.

Questions to explore:
- Does a baby that is always fed ever become hungry?
- What does the reward stream look like under a fixed policy?
- How often does a full baby cry anyway?
"""
