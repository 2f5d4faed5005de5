"""Plugin descriptors, capabilities, the registry of search tabs and the built-in plugins."""