"""
Study 02: Feed When Crying

Let the observation drive the action.

Questions to explore:
- Is reacting to crying cheaper than feeding every step?
- How much does a random policy lose against either?
- How wide is the spread of returns across trajectories?
"""
