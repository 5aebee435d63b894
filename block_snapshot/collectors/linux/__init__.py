"""Linux block collector: sysfs, udev runtime database and mtab."""
