"""
Building blocks shared by every resource package: env settings, the asyncpg
pool, the partial-update SET builder, payload validation and error bodies.
"""
