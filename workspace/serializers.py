from rest_framework import serializers


class MemberSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    name = serializers.CharField(read_only=True)


class CommentSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    user = serializers.CharField(source="author", read_only=True)
    text = serializers.CharField(read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)


class TaskSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    title = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True)
    priority = serializers.CharField(read_only=True)
    done = serializers.BooleanField(read_only=True)
    assignedTo = serializers.CharField(source="assigned_to", read_only=True)
    dueDate = serializers.DateTimeField(source="due_date", read_only=True, allow_null=True)
    comments = CommentSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)


class MessageSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    user = serializers.CharField(source="author", read_only=True)
    text = serializers.CharField(read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)


class ActivityLogEntrySerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    actor = serializers.CharField(read_only=True)
    action = serializers.CharField(read_only=True)
    targetType = serializers.CharField(source="target_type", read_only=True)
    targetId = serializers.CharField(source="target_id", read_only=True)
    details = serializers.CharField(read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)


class WorkspaceSerializer(serializers.Serializer):
    """The whole aggregate, as returned by every workspace mutator."""
    id = serializers.IntegerField(read_only=True)
    teamName = serializers.CharField(source="team_name", read_only=True)
    teamHead = serializers.CharField(source="team_head", read_only=True)
    leaderContact = serializers.CharField(source="leader_contact", read_only=True)
    members = MemberSerializer(source="member_list", many=True, read_only=True)
    tasks = TaskSerializer(source="task_list", many=True, read_only=True)
    messages = MessageSerializer(many=True, read_only=True)
    activityLog = ActivityLogEntrySerializer(source="activity_log", many=True, read_only=True)
    version = serializers.IntegerField(read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
