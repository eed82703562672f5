# Test data and fakes

TENANT_A = "tenant-a"
TENANT_B = "tenant-b"
