"""Tools package for yadb."""
