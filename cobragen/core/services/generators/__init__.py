"""
Generators — plan and render the files of a Cobra application.

``planner`` decides which files to write and with which template,
``renderer`` writes one file, ``project`` runs the whole workflow.
"""
