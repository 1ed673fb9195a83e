"""Infrastructure layer: corpus files, reports, binary database, workspace I/O.

This layer may import from domain. It must never import from services,
commands, or output. The service layer bridges between the two.
"""
