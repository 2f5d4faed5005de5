"""Built-in attribute and file search plugins."""