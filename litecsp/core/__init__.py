"""Core primitives shared by tasks and the router (events and task contexts).

Kept free of router/task state so routines and hosts can import them cheaply.
"""
