"""Turn UniFi data into DogStatsD metrics and events, with a small statsd client."""