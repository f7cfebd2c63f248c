"""
Script: image_ci package
What: Holds the Python generator for the CircleCI config of the Docker image folders.
Doing: Groups the folder scanner, skip rules, job emitters, and CLI entrypoints in one importable package.
Why: Keeps config generation readable and testable instead of hand-editing a long YAML file.
Goal: Provide a clear, maintainable home for the image build pipeline definition.
"""
