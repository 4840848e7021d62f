"""Restaurant inventory service: stock tracking, activity log, staff and usage analytics."""
