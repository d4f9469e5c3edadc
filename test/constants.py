"""Values shared by the test environment setup and the tests"""

TEST_SECRET_KEY = 'marketplace_test_secret_key'
