"""Files attached to model instances.

A model declares an ``AttachedFile``; every instance then owns a set of
files named after its identity, one per configured format, that follow
the instance's save and delete lifecycle.
"""
