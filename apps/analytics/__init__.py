"""Analytics app package: admin statistics and hall utilization reports."""
