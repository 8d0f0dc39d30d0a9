"""
Runtime wiring for the learning-path pipeline: environment config, services, CLI.

- config: RuntimeConfig (.env / environment), get_config / reload_config
- state: AppState builds stores and the completion client from RuntimeConfig
- services: litellm completion client, JSON and Firestore stores
- cli: python -m runtime.cli "query" --user <id>
"""
