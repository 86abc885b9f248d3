"""
setup-go: install a Go toolchain on a pipeline build agent.

The step resolves the archive for the agent platform, downloads it (through
an Artifactory cache when one is configured), extracts it into the step
workspace and exports GOROOT, GOPATH and PATH for later steps.
"""

__version__ = "0.1.0"
