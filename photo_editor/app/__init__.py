"""Application core: the processing workflow and the state objects views bind to.

- Intents enter through WorkflowController (upload / select option / process)
- Views read WorkflowState properties and react to its change signals
"""
