"""
Lambda entry points: the forwarder and the Redis producer it calls.
"""
