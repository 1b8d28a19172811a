from grantflow.core.catalog import WorkflowConfig, get_workflow_config


def get_config() -> WorkflowConfig:
    """Workflow configuration dependency."""
    return get_workflow_config()
