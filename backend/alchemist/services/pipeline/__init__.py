"""
Generation pipeline: typed steps per stage and the orchestrator that sequences them.

Import steps from their subpackages (``alchemist.services.pipeline.planning``, ...)
and the orchestrator from ``alchemist.services.pipeline.assembly``.
"""
