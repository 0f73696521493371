"""Centralized message constants for error messages, logging, and user feedback."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Discord ID Validation Errors
    INVALID_SNOWFLAKE = "Discord snowflake ID must be positive"
    SNOWFLAKE_TOO_LARGE = "Discord snowflake ID exceeds maximum value (2^64)"

    # Volume Validation Errors
    VOLUME_OUT_OF_RANGE = "Volume must be between {minimum} and {maximum}, got {level}"

    # Settings Validation Errors
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"
    INVALID_LAVALINK_URI = "Lavalink URI must start with http:// or https://"

    # Configuration Errors
    DISCORD_TOKEN_REQUIRED = "DISCORD__TOKEN environment variable is required"
    DISCORD_GUILD_ID_REQUIRED = "DISCORD__GUILD_ID environment variable is required"
    BOT_NOT_INITIALIZED = "Bot not initialized. Call set_bot() first."
    CONTAINER_NOT_FOUND = "Container not found on bot instance"

    # Startup Errors
    READY_TIMEOUT = "Timed out after {timeout}s while waiting for Discord client to be ready"
    GATEWAY_CLOSED_BEFORE_READY = "Gateway connection closed before the client became ready"

    # Audio Service Errors
    GUILD_NOT_FOUND = "Guild {guild_id} is not available to the bot"
    CHANNEL_NOT_VOICE = "Channel {channel_id} is not a voice channel"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Lavalink Node
    LAVALINK_CONNECTING = "Connecting to Lavalink node '%s' at %s"
    LAVALINK_CONNECTED = "Connected to Lavalink node '%s'"
    LAVALINK_CLOSED = "Lavalink node pool closed"
    LAVALINK_LOAD_FAILED = "Lavalink failed to load tracks for %r: %s"
    LAVALINK_NO_RESULTS = "No results for %r (source=%s)"

    # Player Operations
    PLAYER_JOINED = "Joined voice channel %s in guild %s"
    PLAYER_DISCONNECTED = "Disconnected player in guild %s"
    PLAYER_STARTED = "Started playing %s in guild %s"
    PLAYER_QUEUED = "Queued %s at position %s in guild %s"
    PLAYER_STOPPED = "Stopped playback in guild %s"
    PLAYER_SKIPPED = "Skipped track in guild %s, next=%s"
    PLAYER_PAUSED = "Paused playback in guild %s"
    PLAYER_RESUMED = "Resumed playback in guild %s"
    PLAYER_VOLUME_SET = "Set volume to %s in guild %s"

    # Guard
    GUARD_REJECTED = "Player guard rejected guild %s: %s"
    GUARD_BACKEND_ERROR = "Audio service failed while retrieving player for guild %s"

    # Command Routing
    COMMAND_DISPATCH = "Dispatching /%s for user %s in guild %s"
    COMMAND_UNKNOWN = "No handler registered for command %r"
    COMMAND_FAILED = "Unhandled error in /%s"
    COMMAND_NO_GUILD = "Rejected /%s outside of a guild"
    REPLY_SEND_FAILED = "Failed to deliver reply for /%s"

    # Application Lifecycle
    BOT_STARTING = "Starting Lavalink Music Bot in {environment} mode"
    BOT_SETUP = "Setting up bot..."
    BOT_CONTAINER_INITIALIZED = "Container initialized successfully"
    BOT_CONTAINER_INIT_FAILED = "Failed to initialize container: %s"
    BOT_SETUP_COMPLETE = "Bot setup complete"
    BOT_STOPPED = "Bot stopped successfully"
    BOT_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down..."
    BOT_FATAL_ERROR = "Fatal error: %s"
    BOT_SHUTTING_DOWN = "Shutting down bot..."
    BOT_CONTAINER_SHUTDOWN = "Container shutdown complete"
    BOT_CONTAINER_SHUTDOWN_ERROR = "Error during container shutdown: %s"
    BOT_SHUTDOWN_COMPLETE = "Bot shutdown complete"
    BOT_READY = "Bot ready as %s (%s)"
    BOT_CONNECTED_GUILDS = "Connected to %s guilds"

    # Bot Cog Management
    BOT_COG_LOADED = "Loaded cog: %s"
    BOT_COG_LOAD_FAILED = "Failed to load cog %s: %s"

    # Bot Command Registration
    BOT_SYNCED_GUILD = "Synced %s commands to guild %s"

    # Bot Error Handling
    BOT_SLASH_COMMAND_ERROR = "Slash command error in '%s': %s"
    BOT_ERROR_MESSAGE_SEND_FAILED = "Failed to send error message to user"

    # Lifecycle Supervisor
    LIFECYCLE_LOGGING_IN = "Logging in the bot."
    LIFECYCLE_LOGIN_FAILED = "Error logging in the bot."
    LIFECYCLE_STARTING = "Starting the bot."
    LIFECYCLE_WAITING_READY = "Waiting up to %ss for the Discord client to be ready."
    LIFECYCLE_READY = "Discord client is ready."
    LIFECYCLE_READY_TIMEOUT = "Timed out after %ss while waiting for Discord client to be ready."
    LIFECYCLE_GATEWAY_FAILED = "Gateway connection failed before the client became ready."
    LIFECYCLE_REGISTERING = "Client is ready, registering commands for guild %s."
    LIFECYCLE_REGISTERED = "Commands registered (%s) for guild %s."
    LIFECYCLE_REGISTRATION_FAILED = "Error during command registration."
    LIFECYCLE_STOPPING = "Stopping the bot."
    LIFECYCLE_GATEWAY_TASK_ERROR = "Gateway task ended with error during shutdown: %r"
    LIFECYCLE_SHUTDOWN_TIMEOUT = "Graceful shutdown timed out after %ss"
    LIFECYCLE_INTERACTION = "Interaction %s received from user %s in guild %s"


class DiscordUIMessages:
    """User-facing replies sent back through the interaction."""

    # Guard Failures
    GUARD_USER_NOT_IN_VOICE = "Firstly, connect to vc."
    GUARD_BOT_NOT_CONNECTED = "Bot is not in vc."
    GUARD_UNKNOWN = "Unknown error."

    # Context
    STATE_SERVER_ONLY = "This command can only be used in a server."

    # Play
    PLAY_NO_RESULTS = "No results."
    PLAY_STARTED = "Playing: {uri}"
    PLAY_QUEUED = "Added to queue: {uri}"

    # Position
    POSITION = "Position: {position}"

    # Playback State
    STATE_NOTHING_PLAYING = "Nothing playing!"
    STATE_NOTHING_CURRENTLY_PLAYING = "Nothing is currently playing"
    STATE_ALREADY_PAUSED = "Player is already paused."
    STATE_NOT_PAUSED = "Player is not paused."

    # Actions
    ACTION_STOPPED = "Stopped playing."
    ACTION_DISCONNECTED = "Disconnected."
    ACTION_PAUSED = "Paused."
    ACTION_RESUMED = "Resumed."
    ACTION_SKIPPED_NOW_PLAYING = "Skipped. Now playing: {uri}"
    ACTION_SKIPPED_QUEUE_EMPTY = "Skipped. Stopped playing because the queue is now empty."

    # Volume
    VOLUME_UPDATED = "Volume updated: {level}%"
    VOLUME_OUT_OF_RANGE = "Volume out of range: 0% - 100%!"

    # Generic
    ERROR_UNKNOWN = "Unknown error."
