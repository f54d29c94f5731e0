"""
Entry Points for Limelight Targeting
====================================

Each module is a standalone entry point.

Active nodes:
    limelight_check   Command line vision checks (status, distance,
                      reliability, pipelines, sequence)
"""
