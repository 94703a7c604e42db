"""
Services for configuring and launching the Appium server.

- discovery/: locating node, npm and the main Appium script
- server/: the service builder, argument construction and the process handle
"""
