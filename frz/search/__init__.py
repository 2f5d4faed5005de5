"""Search data, rows, fuzzy matching, result collectors and result streaming."""