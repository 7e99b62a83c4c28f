"""Simulation core (agents, scenario, engine, metrics, visualisation).

The sub-modules are kept lightweight so that policies can reuse the agent and
geometry helpers and so that each piece can be unit tested on hand-built
scenarios.
"""
