"""
Generative POMDP: sampling-based Partially Observable Markov Decision Processes

A small framework for defining POMDPs through a generative step function,
illustrated with the classic Crying Baby problem.
"""

__version__ = "0.1.0"
