"""
Chart modules. Each module exposes META (ChartMeta), a pydantic Params model
and run(ctx, params) returning (figure, outputs); registry.py discovers them.
"""
