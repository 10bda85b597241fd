"""
Kernel layer: persistence models, the identity core and the error taxonomy.

Transport code (ferryapp.api) calls into the kernel and translates its
errors; the kernel never imports from the API layer.
"""
